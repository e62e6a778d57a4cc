"""
Maximum entropy learner: fit a log-linear model by minimizing the
penalized negative log likelihood of the training data with L-BFGS
"""

from collections import namedtuple
import sys

from .classifier import LinearClassifier
from .interface import AbstractLearner
from .minimize import (DEFAULT_TOLERANCE, LbfgsMinimizer)
from .objective import MaxentObjective
from .util import EncodedCorpus

# pylint: disable=too-few-public-methods


class MaxentArgs(namedtuple('MaxentArgs',
                            ['sigma',
                             'iterations',
                             'tolerance'])):
    """
    Parameters for the maximum entropy learner

    Parameters
    ----------
    sigma: float
        Controls the strength of the penalty term. 1.0 is a reasonable
        value for large problems; 0 is a special value meaning no
        penalty at all.

    iterations: int
        Maximum number of iterations the minimizer may take

    tolerance: float
        Convergence tolerance for the minimizer
    """
    def __new__(cls, sigma=1.0, iterations=50, tolerance=DEFAULT_TOLERANCE):
        return super(MaxentArgs, cls).__new__(cls, sigma, iterations,
                                              tolerance)


class MaxentLearner(AbstractLearner):
    """
    Maximum entropy (multinomial logistic regression) learner

    Parameters
    ----------
    args: MaxentArgs

    feature_extractor: callable
        input -> mapping from feature to count

    verbose: int, optional
        Verbosity level

    Attributes
    ----------
    minimizer: LbfgsMinimizer
        (after fitting) the minimizer used, with its history
    """
    def __init__(self, args, feature_extractor, verbose=0):
        if args.sigma < 0:
            raise ValueError("sigma must be >= 0 (is {})".format(args.sigma))
        self.args = args
        self.feature_extractor = feature_extractor
        self.verbose = verbose
        self.minimizer = None

    def fit(self, instances):
        corpus = EncodedCorpus.build(instances, self.feature_extractor)
        if self.verbose > 1:
            print("FEAT. SPACE SIZE:",
                  corpus.linearizer.num_features, "x",
                  corpus.linearizer.num_labels, file=sys.stderr)
        objective = MaxentObjective(corpus.encoding,
                                    corpus.data,
                                    corpus.linearizer,
                                    self.args.sigma)
        self.minimizer = LbfgsMinimizer(self.args.iterations,
                                        verbose=self.verbose)
        weights = self.minimizer.minimize(objective,
                                          corpus.initial_weights(),
                                          self.args.tolerance)
        return LinearClassifier(weights,
                                corpus.encoding,
                                corpus.linearizer,
                                self.feature_extractor,
                                name='maxent')
