"""
Experiment results
"""

from collections import namedtuple
import itertools

import numpy as np
from scipy.stats import pearsonr
from sklearn.metrics import confusion_matrix
from tabulate import tabulate

from .util import truncate

# pylint: disable=too-few-public-methods


class ClassifierError(namedtuple('ClassifierError',
                                 'input guess gold confidence')):
    """
    A single misclassified instance
    """
    def table_row(self):
        "error as a row (meant to be included in a table)"
        return [truncate(str(self.input), 40),
                self.guess,
                self.gold,
                self.confidence]


def _sloppy_div(num, den):
    """
    Divide by denominator unless it's zero, in which case just return 0
    """
    return (num / float(den)) if den > 0 else 0


def _correlation(xs, ys):
    """
    Pearson correlation between two samples, or None if it is
    undefined (fewer than two points, or a constant sample)
    """
    if len(xs) < 2 or np.ptp(xs) == 0 or np.ptp(ys) == 0:
        return None
    return float(pearsonr(xs, ys)[0])


class ClassifierReport(object):
    """
    Accuracy, confusion matrix, and how well the classifier's
    confidence tracks its correctness, for a single classifier on a
    single test set.

    Parameters
    ----------
    labels: [label]
        labels in the order they should appear in the confusion
        matrix

    gold: [label]

    predicted: [label]

    confidence: [float]
        probability the classifier assigned to its own guess

    errors: [ClassifierError]
    """
    def __init__(self, labels, gold, predicted, confidence, errors,
                 name=None):
        self.name = name
        self.labels = labels
        self.errors = errors
        correct = np.array([g == p for g, p in zip(gold, predicted)],
                           dtype='d')
        self.total = len(gold)
        self.correct = int(correct.sum())
        self.accuracy = _sloppy_div(self.correct, self.total)
        self.correlation = _correlation(correct, np.array(confidence))
        if self.total:
            self.confusion = confusion_matrix(gold, predicted, labels=labels)
        else:
            self.confusion = np.zeros((len(labels), len(labels)),
                                      dtype=int)

    @classmethod
    def evaluate(cls, classifier, instances):
        """
        Run the classifier on every instance and score it against
        the gold labels
        """
        labels = list(getattr(classifier, 'labels', []))
        gold = []
        predicted = []
        confidence = []
        errors = []
        for instance in instances:
            guess, prob = classifier.confidence(instance.input)
            gold.append(instance.label)
            predicted.append(guess)
            confidence.append(prob)
            if guess != instance.label:
                errors.append(ClassifierError(input=instance.input,
                                              guess=guess,
                                              gold=instance.label,
                                              confidence=prob))
        for label in itertools.chain(gold, predicted):
            if label not in labels:
                labels.append(label)
        return cls(labels, gold, predicted, confidence, errors,
                   name=getattr(classifier, 'name', None))

    def normalized_confusion(self):
        """
        Confusion matrix with each (gold label) row summing to 1,
        rows of labels that never occur as gold being left at 0
        """
        matrix = self.confusion.astype('d')
        sums = matrix.sum(axis=1, keepdims=True)
        return np.divide(matrix, sums, out=np.zeros_like(matrix),
                         where=sums > 0)

    def table_row(self):
        "Scores as a row (meant to be included in a table)"
        return [self.name,
                self.accuracy,
                self.correlation,
                self.correct,
                self.total]

    @classmethod
    def table_header(cls):
        "Header for table using these scores"
        return ["learner", "accuracy", "corr (acc/conf)", "correct", "total"]

    def summary(self):
        "One line summary of the scores"
        corr = ('n/a' if self.correlation is None
                else '{:.3f}'.format(self.correlation))
        return ('Accuracy: {:.4f} ({}/{})\t'
                'Correlation of accuracy and confidence: {}'
                '').format(self.accuracy, self.correct, self.total, corr)

    def errors_table(self):
        "Misclassified instances"
        return tabulate([x.table_row() for x in self.errors],
                        headers=["input", "guess", "gold", "confidence"],
                        floatfmt=".3f")

    def table(self):
        "Full report: summary and confusion matrices (counts/normalized)"
        labels = [str(x) for x in self.labels]
        return '\n\n'.join([
            self.summary(),
            show_confusion_matrix(labels, self.confusion,
                                  main_header='Confusion matrix (counts)'),
            show_confusion_matrix(labels, self.normalized_confusion(),
                                  main_header='Confusion matrix '
                                  '(normalized)')])


def show_reports(reports):
    """
    Table comparing several classifier reports, one row each
    """
    return tabulate([r.table_row() for r in reports],
                    headers=ClassifierReport.table_header(),
                    floatfmt=".3f",
                    missingval="n/a")


# ---------------------------------------------------------------------
# confusion matrix
# ---------------------------------------------------------------------

def _mk_confusion_row(diagonal, row):
    '''
    Given a list of numbers, replace the zeros by '.'.
    Put angle brackets around the diagonal column
    '''
    res = []
    for i, col in enumerate(row):
        if isinstance(col, float) and col:
            col = '{:.3f}'.format(col)
        cell = col or '.'
        cell = '<{}>'.format(cell) if i == diagonal else cell
        res.append(cell)
    return res


def show_confusion_matrix(labels, matrix, main_header=None):
    '''
    Return a string representing a confusion matrix in 2D
    (rows are gold labels, columns are predictions)
    '''
    if not labels:
        return main_header or ''
    longest_label = max(labels, key=len)
    len_longest = len(longest_label)
    rlabels = [x.rjust(len_longest, ' ') + '-' for x in labels]
    # fake vertical headers by making them rows
    headers = [[''] + list(row)
               for row in itertools.zip_longest(*rlabels, fillvalue='')]
    body = []
    for rnum, (label, row) in enumerate(zip(labels, matrix.tolist())):
        body.append([label] + _mk_confusion_row(rnum, row))
    table = tabulate(headers + body)
    if main_header:
        return main_header + '\n' + table
    else:
        return table

# ---------------------------------------------------------------------
# discriminating features
# ---------------------------------------------------------------------


def show_discriminating_features(listing):
    """Build a table of discriminating features per label.

    Given a list of discriminating features for each label,
    return a string containing a hopefully friendly 2D table
    visualisation.

    Parameters
    ----------
    listing: list of (string, list of (string, float))
        List of (label, features) pairs; the features are themselves a
        list of (feature, weight) pairs.
    """
    rows = []
    for label, feats in listing:
        if not feats:
            rows.append([label, '', ''])
            continue
        rows.append([label] + list(feats[0]))
        rows.extend([''] + list(x) for x in feats[1:])
    return tabulate(rows, floatfmt=".3f")
