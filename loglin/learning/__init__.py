'''
loglin learners

Learners
--------
Following scikit conventions, a learner is an object that, once
fitted to some training data (a list of labeled instances), becomes a
classifier (which can be used to make predictions).

* `MaxentLearner`: log-linear model fitted by minimizing the L2
  penalized negative log likelihood with L-BFGS
* `PerceptronLearner`: multiclass perceptron over the same feature
  space
* `MostFrequentLabelLearner`: baseline

The `train` function builds a learner from a `Learner` name and a set
of `Hyperparameters` and fits it in one go.

Classifiers
-----------
Classifiers implement

* `probabilities(input)`: ordered mapping from each label to its
  probability
* `label(input)`: the most probable label
'''

from .baseline import (MostFrequentLabelClassifier,
                       MostFrequentLabelLearner)
from .classifier import LinearClassifier
from .control import (Hyperparameters,
                      Learner,
                      mk_learner,
                      train)
from .maxent import (MaxentArgs,
                     MaxentLearner)
from .objective import MaxentObjective
from .perceptron import (PerceptronArgs,
                         PerceptronLearner)
from .util import NumericalError
# pylint: disable=wildcard-import
from .interface import *
# pylint: enable=wildcard-import
