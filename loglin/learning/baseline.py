"""
Baseline learner: always predict the most frequent training label
"""

from collections import Counter, OrderedDict

from .interface import (AbstractLearner, ProbabilisticClassifier)

# pylint: disable=too-few-public-methods


class MostFrequentLabelClassifier(ProbabilisticClassifier):
    """
    Ignores its input altogether; the probability of each label is
    its relative frequency in the training data.

    Parameters
    ----------
    label_counts: Counter(label, int)
    """
    def __init__(self, label_counts):
        total = float(sum(label_counts.values()))
        self._probs = OrderedDict((lbl, cnt / total)
                                  for lbl, cnt in label_counts.items())
        self._best = max(self._probs, key=self._probs.get)
        self.name = 'baseline'

    @property
    def labels(self):
        "labels this classifier can emit, in order of first appearance"
        return list(self._probs)

    def probabilities(self, input_):
        return OrderedDict(self._probs)

    def label(self, input_):
        return self._best


class MostFrequentLabelLearner(AbstractLearner):
    """
    Learner for :py:class:`MostFrequentLabelClassifier`
    """
    def fit(self, instances):
        counts = Counter()
        for instance in instances:
            counts[instance.label] += 1
        if not counts:
            raise ValueError('Need at least one training instance')
        return MostFrequentLabelClassifier(counts)
