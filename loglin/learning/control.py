"""
Central interface to the learners
"""

from collections import namedtuple

from ..util import ArgparserEnum
from .baseline import MostFrequentLabelLearner
from .maxent import (MaxentArgs, MaxentLearner)
from .minimize import DEFAULT_TOLERANCE
from .perceptron import (PerceptronArgs, PerceptronLearner)

# pylint: disable=too-few-public-methods


class Learner(ArgparserEnum):
    '''
    Available learners
    '''
    maxent = 1
    perceptron = 2
    baseline = 3


class Hyperparameters(namedtuple('Hyperparameters',
                                 ['feature_extractor',
                                  'sigma',
                                  'iterations',
                                  'tolerance',
                                  'average',
                                  'random_state'])):
    """
    Training configuration shared by all learners (each learner
    only looks at what concerns it)

    Parameters
    ----------
    feature_extractor: callable
        input -> mapping from feature to count

    sigma: float
        L2 penalty strength for maxent (0 disables the penalty)

    iterations: int
        Maximum number of minimizer iterations (maxent) or number of
        epochs (perceptron)

    tolerance: float
        Minimizer convergence tolerance (maxent)

    average: bool
        Use averaged weights (perceptron)

    random_state: None, int or numpy RandomState
        Shuffling source (perceptron)
    """
    def __new__(cls, feature_extractor, sigma=1.0, iterations=50,
                tolerance=DEFAULT_TOLERANCE, average=False,
                random_state=None):
        return super(Hyperparameters, cls).__new__(cls,
                                                   feature_extractor,
                                                   sigma,
                                                   iterations,
                                                   tolerance,
                                                   average,
                                                   random_state)


def mk_learner(learner, hyperparameters, verbose=0):
    """
    Instantiate a learner from its name and the hyperparameters

    :type learner: Learner
    """
    hyp = hyperparameters
    if learner == Learner.maxent:
        args = MaxentArgs(sigma=hyp.sigma,
                          iterations=hyp.iterations,
                          tolerance=hyp.tolerance)
        return MaxentLearner(args, hyp.feature_extractor, verbose=verbose)
    elif learner == Learner.perceptron:
        args = PerceptronArgs(iterations=hyp.iterations,
                              average=hyp.average,
                              random_state=hyp.random_state)
        return PerceptronLearner(args, hyp.feature_extractor,
                                 verbose=verbose)
    elif learner == Learner.baseline:
        return MostFrequentLabelLearner()
    else:
        raise ValueError('Unknown learner: {}'.format(learner))


def train(instances, hyperparameters, learner=Learner.maxent, verbose=0):
    """
    Train a classifier on the labeled instances

    Parameters
    ----------
    instances: [LabeledInstance]

    hyperparameters: Hyperparameters

    learner: Learner

    Returns
    -------
    classifier: ProbabilisticClassifier
    """
    return mk_learner(learner, hyperparameters, verbose=verbose).fit(instances)
