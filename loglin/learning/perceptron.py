"""
Multiclass perceptron learner.

The perceptron works on the same encoded feature space as the maximum
entropy learner, but instead of minimizing an objective it makes
additive, mistake-driven updates directly on the weights: whenever the
current weights predict the wrong label for a training datum, the
datum's feature counts are added to the gold label's weights and
subtracted from the predicted label's.

Averaging
---------
The learner also keeps a running sum of the weight vector after every
training step, which gives the averaged perceptron weights
(`avg_weights`). By default the classifier returned by `fit` uses the
raw final weights, NOT the averaged ones; pass `average=True` to get a
classifier built on the averaged weights instead.
"""

from collections import namedtuple
import sys
import time

import numpy as np
from sklearn.utils import check_random_state

from .classifier import LinearClassifier
from .interface import AbstractLearner
from .util import (best_label, check_finite, datum_scores, EncodedCorpus)

# pylint: disable=invalid-name
# lots of mathy things here, so names may follow those conventions


class PerceptronArgs(namedtuple('PerceptronArgs',
                                ['iterations',
                                 'average',
                                 'random_state'])):
    """
    Parameters for perceptron learners

    Parameters
    ----------
    iterations: int
        Number of passes over the training data (aka epochs)

    average: bool
        Build the classifier from averaged weights rather than the
        final ones

    random_state: None, int or numpy RandomState
        Source of the per-epoch shuffles; pass a seed for
        reproducible training
    """
    def __new__(cls, iterations=5, average=False, random_state=None):
        return super(PerceptronArgs, cls).__new__(cls, iterations,
                                                  average, random_state)


class PerceptronLearner(AbstractLearner):
    """Vanilla multiclass perceptron learner

    Parameters
    ----------
    args: PerceptronArgs

    feature_extractor: callable
        input -> mapping from feature to count

    verbose: int, optional
        Verbosity level

    Attributes
    ----------
    weights: array(float)
        (after fitting) final weight vector

    avg_weights: array(float)
        (after fitting) weight vector averaged over every training
        step
    """
    def __init__(self, args, feature_extractor, verbose=0):
        self.args = args
        self.feature_extractor = feature_extractor
        self.verbose = verbose
        self.weights = None
        self.avg_weights = None

    def fit(self, instances):
        """ learn perceptron weights """
        corpus = EncodedCorpus.build(instances, self.feature_extractor)
        self.init_model(corpus)
        self.learn(corpus.data, corpus.linearizer)
        W = self.avg_weights if self.args.average else self.weights
        name = 'avg-perceptron' if self.args.average else 'perceptron'
        return LinearClassifier(W,
                                corpus.encoding,
                                corpus.linearizer,
                                self.feature_extractor,
                                name=name)

    def init_model(self, corpus):
        "zero out the weights"
        if self.verbose > 1:
            print("FEAT. SPACE SIZE:",
                  corpus.linearizer.num_features, "x",
                  corpus.linearizer.num_labels, file=sys.stderr)
        self.weights = corpus.initial_weights()
        self.avg_weights = corpus.initial_weights()

    def learn(self, data, linearizer):
        """
        Run the training epochs, updating the weights in place
        """
        verbose = self.verbose
        rng = check_random_state(self.args.random_state)
        W = self.weights.reshape(linearizer.shape)
        total = np.zeros(linearizer.shape, dtype='d')
        steps = 0
        if verbose > 1:
            print("-" * 100, file=sys.stderr)
            print("Training...", file=sys.stderr)
            start_time = time.time()

        for n in range(self.args.iterations):
            if verbose > 1:
                print("it. %3s \t" % n, end='', file=sys.stderr)
                t0 = time.time()
            mistakes = 0
            for i in rng.permutation(len(data)):
                mistakes += self.update(data[i], W)
                total += W
                steps += 1
            if verbose > 1:
                t1 = time.time()
                print("%s\terrors = %-7s" % (len(data), mistakes),
                      file=sys.stderr)
                print("\ttime = %-4s" % round(t1 - t0, 3), file=sys.stderr)
        if verbose > 1:
            elapsed_time = time.time() - start_time
            print("done in %s sec." % round(elapsed_time, 3), file=sys.stderr)

        if steps:
            total /= steps
        self.avg_weights = check_finite(total, 'averaged weights').reshape(-1)

    def update(self, datum, W):
        """ simple multiclass perceptron update rule

        Parameters
        ----------
        datum: EncodedDatum
            labeled datum

        W: 2D array(float)
            (F, L) view of the weights, updated in place

        Returns
        -------
        error: int
            1 if the current weights predicted the wrong label

        Raises
        ------
        NumericalError
            if the weights have overflowed
        """
        gold = datum.label
        scores = check_finite(datum_scores(datum, W), 'scores')
        predicted = best_label(scores)
        if predicted == gold:
            return 0
        ids = datum.feature_ids
        W[ids, gold] += datum.counts
        W[ids, predicted] -= datum.counts
        return 1
