"""
loglin.learning tests
"""

# pylint: disable=too-few-public-methods, no-self-use, no-member
# pylint: disable=invalid-name
# no-member: numpy

import math
import unittest

import numpy as np
from numpy.testing import (assert_allclose, assert_array_equal)

from ..encoding import (Encoding, IndexLinearizer, Indexer)
from ..features import BagOfFeatures
from ..instance import LabeledInstance
from . import (Hyperparameters,
               Learner,
               LinearClassifier,
               MaxentArgs,
               MaxentLearner,
               MaxentObjective,
               MostFrequentLabelLearner,
               NumericalError,
               PerceptronArgs,
               PerceptronLearner,
               train)
from .minimize import LbfgsMinimizer
from .util import (EncodedCorpus, log_normalize)


def mk_instances(*rows):
    "labeled instances from (label, feature names) pairs"
    return [LabeledInstance(label, feats) for label, feats in rows]


ANIMALS = mk_instances(("cat", ["fuzzy", "claws", "small"]),
                       ("bear", ["fuzzy", "claws", "big"]),
                       ("cat", ["claws", "medium"]))

# a few repeated features so that counts are not all 1
SYNTHETIC = mk_instances(("x", ["a", "b", "b"]),
                         ("y", ["b", "c"]),
                         ("z", ["c", "c", "c", "d"]),
                         ("x", ["a", "d"]),
                         ("y", ["e"]),
                         ("z", []))

# label is given away by the first feature
SEPARABLE = mk_instances(("red", ["r", "n1"]),
                         ("green", ["g", "n1"]),
                         ("blue", ["b", "n2"]),
                         ("red", ["r", "n2", "n3"]),
                         ("green", ["g", "n3"]),
                         ("blue", ["b", "n1", "n3"]),
                         ("red", ["r"]),
                         ("green", ["g", "n2"]))


def mk_objective(instances, sigma):
    "objective over the instances"
    corpus = EncodedCorpus.build(instances, BagOfFeatures())
    return corpus, MaxentObjective(corpus.encoding,
                                   corpus.data,
                                   corpus.linearizer,
                                   sigma)


def numerical_gradient(objective, x, eps=1e-5):
    "central finite differences"
    grad = np.zeros_like(x)
    for i in range(len(x)):
        x_plus = x.copy()
        x_minus = x.copy()
        x_plus[i] += eps
        x_minus[i] -= eps
        grad[i] = (objective.value_at(x_plus) -
                   objective.value_at(x_minus)) / (2 * eps)
    return grad


def accuracy(classifier, instances):
    "fraction of instances the classifier gets right"
    correct = [classifier.label(x.input) == x.label for x in instances]
    return sum(correct) / float(len(correct))


class ObjectiveTest(unittest.TestCase):
    '''
    maximum entropy objective function
    '''
    def test_value_at_zero(self):
        'uniform posteriors at zero weights'
        corpus, objective = mk_objective(SYNTHETIC, sigma=2.0)
        x = corpus.initial_weights()
        expected = len(SYNTHETIC) * math.log(3)
        self.assertAlmostEqual(expected, objective.value_at(x))

    def test_value_by_hand(self):
        'a single datum, a single feature'
        instances = mk_instances(("p", ["f"]), ("q", []))
        corpus, objective = mk_objective(instances, sigma=0.0)
        lin = corpus.linearizer
        x = corpus.initial_weights()
        x[lin.linear_index(0, 0)] = 2.0
        x[lin.linear_index(0, 1)] = -1.0
        # datum 1: scores (2, -1), gold p; datum 2: scores (0, 0), gold q
        expected = (math.log(math.exp(2) + math.exp(-1)) - 2.0 +
                    math.log(2))
        self.assertAlmostEqual(expected, objective.value_at(x))
        # penalty
        _, penalized = mk_objective(instances, sigma=3.0)
        self.assertAlmostEqual(expected + 0.5 * 9.0 * 5.0,
                               penalized.value_at(x))

    def test_gradient(self):
        'analytic gradient matches finite differences'
        rng = np.random.RandomState(1234)
        for sigma in [0.0, 0.5, 2.0]:
            _, objective = mk_objective(SYNTHETIC, sigma=sigma)
            for _ in range(3):
                x = rng.normal(scale=1.0, size=objective.dimension)
                analytic = objective.gradient_at(x)
                numeric = numerical_gradient(objective, x)
                assert_allclose(analytic, numeric, rtol=0, atol=1e-5)

    def test_gradient_is_expected_minus_empirical(self):
        'at zero, no penalty: predicted counts minus observed counts'
        corpus, objective = mk_objective(ANIMALS, sigma=0.0)
        enc = corpus.encoding
        lin = corpus.linearizer
        grad = objective.gradient_at(corpus.initial_weights())
        claws = enc.feature_id('claws')
        cat = enc.label_id('cat')
        bear = enc.label_id('bear')
        # claws fires in all three, twice with cat
        self.assertAlmostEqual(1.5 - 2.0,
                               grad[lin.linear_index(claws, cat)])
        self.assertAlmostEqual(1.5 - 1.0,
                               grad[lin.linear_index(claws, bear)])

    def test_large_weights(self):
        'no overflow with huge scores'
        corpus, objective = mk_objective(SYNTHETIC, sigma=0.0)
        x = np.full(corpus.linearizer.size, 400.0)
        x[::3] = -400.0
        value = objective.value_at(x)
        self.assertTrue(np.isfinite(value))
        self.assertTrue(np.all(np.isfinite(objective.gradient_at(x))))

    def test_nan(self):
        'corrupt weights are fatal'
        corpus, objective = mk_objective(SYNTHETIC, sigma=1.0)
        x = corpus.initial_weights()
        x[0] = np.nan
        self.assertRaises(NumericalError, objective.value_at, x)

    def test_cache(self):
        'same point, same answer, even if the caller recycles arrays'
        corpus, objective = mk_objective(SYNTHETIC, sigma=1.0)
        x = corpus.initial_weights()
        value0 = objective.value_at(x)
        grad0 = objective.gradient_at(x)
        assert_array_equal(grad0, objective.gradient_at(x.copy()))
        x[1] = 0.5
        self.assertNotEqual(value0, objective.value_at(x))
        x[1] = 0.0
        self.assertEqual(value0, objective.value_at(x))

    def test_gradient_not_shared(self):
        'scribbling on a returned gradient does not affect the next one'
        corpus, objective = mk_objective(SYNTHETIC, sigma=1.0)
        x = corpus.initial_weights()
        grad = objective.gradient_at(x)
        expected = grad.copy()
        grad[:] = 0
        assert_array_equal(expected, objective.gradient_at(x.copy()))
        _, grad = objective.value_and_gradient_at(x)
        grad[:] = 0
        assert_array_equal(expected, objective.gradient_at(x))

    def test_value_and_gradient(self):
        'combined call agrees with the separate ones'
        rng = np.random.RandomState(5)
        _, objective = mk_objective(ANIMALS, sigma=0.5)
        x = rng.normal(size=objective.dimension)
        value, grad = objective.value_and_gradient_at(x)
        self.assertEqual(objective.value_at(x.copy()), value)
        assert_array_equal(objective.gradient_at(x.copy()), grad)


class MinimizerTest(unittest.TestCase):
    '''
    L-BFGS wrapper
    '''
    def test_monotone_descent(self):
        'accepted iterates never go uphill'
        corpus, objective = mk_objective(SYNTHETIC, sigma=0.0)
        minimizer = LbfgsMinimizer(30)
        x = minimizer.minimize(objective, corpus.initial_weights(), 1e-6)
        history = minimizer.history
        self.assertTrue(len(history) > 1)
        for before, after in zip(history, history[1:]):
            self.assertTrue(after <= before + 1e-9)
        self.assertTrue(objective.value_at(x) < history[0])

    def test_iteration_cap(self):
        'running out of iterations is not an error'
        corpus, objective = mk_objective(SYNTHETIC, sigma=0.0)
        minimizer = LbfgsMinimizer(1)
        x = minimizer.minimize(objective, corpus.initial_weights())
        self.assertEqual(corpus.linearizer.size, len(x))
        self.assertTrue(objective.value_at(x) <=
                        objective.value_at(corpus.initial_weights()))

    def test_converges_to_stationary_point(self):
        'with a penalty, the gradient vanishes at the solution'
        corpus, objective = mk_objective(SYNTHETIC, sigma=1.0)
        minimizer = LbfgsMinimizer(200)
        x = minimizer.minimize(objective, corpus.initial_weights(), 1e-10)
        self.assertTrue(np.max(np.abs(objective.gradient_at(x))) < 1e-3)

    def test_empty(self):
        'nothing to minimize'
        instances = mk_instances(("a", []), ("b", []))
        corpus, objective = mk_objective(instances, sigma=1.0)
        self.assertEqual(0, corpus.linearizer.size)
        x = LbfgsMinimizer(10).minimize(objective, corpus.initial_weights())
        self.assertEqual(0, len(x))


class MaxentTest(unittest.TestCase):
    '''
    maximum entropy learner and classifier
    '''
    def test_cat_and_bear(self):
        'shared features with the cats make it a cat'
        hyp = Hyperparameters(feature_extractor=BagOfFeatures(),
                              sigma=3.0,
                              iterations=20)
        classifier = train(ANIMALS, hyp)
        probs = classifier.probabilities(["claws", "small"])
        self.assertTrue(probs["cat"] > probs["bear"])
        self.assertEqual("cat", classifier.label(["claws", "small"]))
        self.assertAlmostEqual(1.0, sum(probs.values()), places=9)

    def test_normalization(self):
        'probabilities always sum to 1'
        learner = MaxentLearner(MaxentArgs(sigma=0.5, iterations=50),
                                BagOfFeatures())
        classifier = learner.fit(SYNTHETIC)
        inputs = [x.input for x in SYNTHETIC] + [["a", "c", "q"], [],
                                                 ["never", "seen"]]
        for input_ in inputs:
            probs = classifier.probabilities(input_)
            self.assertEqual(['x', 'y', 'z'], list(probs))
            self.assertAlmostEqual(1.0, sum(probs.values()), places=9)

    def test_fits_training_data(self):
        'little regularization: training data is learned'
        learner = MaxentLearner(MaxentArgs(sigma=0.1, iterations=100),
                                BagOfFeatures())
        classifier = learner.fit(SEPARABLE)
        self.assertEqual(1.0, accuracy(classifier, SEPARABLE))
        self.assertTrue(len(learner.minimizer.history) > 1)

    def test_unknown_input(self):
        'nothing known about the input: uniform, first label wins'
        classifier = train(ANIMALS,
                           Hyperparameters(feature_extractor=BagOfFeatures(),
                                           sigma=1.0))
        probs = classifier.probabilities(["scales", "wings"])
        assert_allclose([0.5, 0.5], list(probs.values()))
        self.assertEqual("cat", classifier.label([]))

    def test_single_label(self):
        'only one label to learn'
        instances = mk_instances(("cat", ["a"]), ("cat", ["b", "c"]))
        for sigma in [0.0, 1.0]:
            classifier = train(instances,
                               Hyperparameters(
                                   feature_extractor=BagOfFeatures(),
                                   sigma=sigma))
            self.assertEqual({"cat": 1.0},
                             dict(classifier.probabilities(["a"])))
            self.assertEqual("cat", classifier.label(["z"]))

    def test_negative_sigma(self):
        'sigma must be >= 0'
        self.assertRaises(ValueError, MaxentLearner,
                          MaxentArgs(sigma=-1.0), BagOfFeatures())

    def test_empty_training(self):
        'nothing to learn from'
        hyp = Hyperparameters(feature_extractor=BagOfFeatures())
        for learner in Learner:
            self.assertRaises(ValueError, train, [], hyp, learner=learner)


class ClassifierTest(unittest.TestCase):
    '''
    linear classifiers built from known weights
    '''
    features = Indexer(['f', 'g']).freeze()
    labels = Indexer(['a', 'b', 'c']).freeze()
    encoding = Encoding(features=features, labels=labels)
    linearizer = IndexLinearizer.from_encoding(encoding)

    def mk_classifier(self, weights):
        "classifier on a bag of features"
        return LinearClassifier(np.array(weights, dtype='d'),
                                self.encoding,
                                self.linearizer,
                                BagOfFeatures())

    def test_scores(self):
        'scores are linear in the feature counts'
        # rows: features f, g; columns: labels a, b, c
        classifier = self.mk_classifier([1, 2, 3,
                                         0, -1, 5])
        assert_array_equal([2, 3, 11], classifier.scores(['f', 'f', 'g']))
        self.assertEqual('c', classifier.label(['f', 'f', 'g']))
        self.assertEqual(-1.0, classifier.weight('g', 'b'))
        self.assertEqual(0.0, classifier.weight('h', 'b'))

    def test_probabilities(self):
        'softmax of the scores'
        classifier = self.mk_classifier([1, 2, 3,
                                         0, 0, 0])
        probs = classifier.probabilities(['f'])
        expected = np.exp([1, 2, 3]) / np.sum(np.exp([1, 2, 3]))
        assert_allclose(expected, list(probs.values()))
        self.assertEqual(['a', 'b', 'c'], list(probs))

    def test_stability(self):
        'huge scores do not overflow'
        classifier = self.mk_classifier([1000, 999, -1000,
                                         0, 0, 0])
        probs = classifier.probabilities(['f'])
        self.assertTrue(all(np.isfinite(p) for p in probs.values()))
        self.assertAlmostEqual(1.0, sum(probs.values()), places=9)
        self.assertAlmostEqual(1 / (1 + math.exp(-1)), probs['a'])
        assert_allclose(log_normalize(np.array([1000.0, 1000.0])),
                        [math.log(0.5), math.log(0.5)])

    def test_ties(self):
        'ties go to the first label'
        classifier = self.mk_classifier([0, 1, 1,
                                         0, 0, 0])
        self.assertEqual('b', classifier.label(['f']))
        self.assertEqual('a', classifier.label([]))

    def test_immutable(self):
        'weights cannot be changed behind our back'
        weights = np.zeros(6)
        classifier = self.mk_classifier(weights)
        weights[0] = 100
        self.assertEqual(0.0, classifier.weights[0])
        with self.assertRaises(ValueError):
            classifier.weights[0] = 1.0

    def test_bad_shape(self):
        'weights must fit the linearizer'
        self.assertRaises(ValueError, self.mk_classifier, [1, 2, 3])

    def test_important_features(self):
        'best features for each label'
        classifier = self.mk_classifier([1, 2, 3,
                                         0, -1, 5])
        listing = classifier.important_features(1)
        self.assertEqual([('a', [('f', 1.0)]),
                          ('b', [('f', 2.0)]),
                          ('c', [('g', 5.0)])],
                         listing)


class PerceptronTest(unittest.TestCase):
    '''
    multiclass perceptron
    '''
    def test_update(self):
        'mistakes move weight from the predicted to the gold label'
        instances = mk_instances(("x", ["a"]), ("y", ["b", "b"]))
        corpus = EncodedCorpus.build(instances, BagOfFeatures())
        learner = PerceptronLearner(PerceptronArgs(iterations=1),
                                    BagOfFeatures())
        learner.init_model(corpus)
        W = learner.weights.reshape(corpus.linearizer.shape)
        # all scores 0, so x (label 0) is predicted: correct, no update
        self.assertEqual(0, learner.update(corpus.data[0], W))
        assert_array_equal(np.zeros(4), learner.weights)
        # wrong for y
        self.assertEqual(1, learner.update(corpus.data[1], W))
        assert_array_equal([[0, 0], [-2, 2]], W)
        self.assertEqual(0, learner.update(corpus.data[1], W))

    def test_separable(self):
        'enough epochs get the training data right'
        learner = PerceptronLearner(PerceptronArgs(iterations=30,
                                                   random_state=42),
                                    BagOfFeatures())
        classifier = learner.fit(SEPARABLE)
        self.assertEqual(1.0, accuracy(classifier, SEPARABLE))
        for input_ in [x.input for x in SEPARABLE]:
            probs = classifier.probabilities(input_)
            self.assertAlmostEqual(1.0, sum(probs.values()), places=9)

    def test_seeded(self):
        'same seed, same weights'
        weights = []
        for _ in range(2):
            learner = PerceptronLearner(PerceptronArgs(iterations=3,
                                                       random_state=7),
                                        BagOfFeatures())
            learner.fit(SYNTHETIC)
            weights.append(learner.weights)
        assert_array_equal(weights[0], weights[1])

    def test_averaging(self):
        'raw weights by default, averaged ones on request'
        raw = PerceptronLearner(PerceptronArgs(iterations=4,
                                               random_state=3),
                                BagOfFeatures())
        classifier = raw.fit(SYNTHETIC)
        assert_array_equal(raw.weights, classifier.weights)
        self.assertEqual(raw.weights.shape, raw.avg_weights.shape)

        avg = PerceptronLearner(PerceptronArgs(iterations=4,
                                               average=True,
                                               random_state=3),
                                BagOfFeatures())
        avg_classifier = avg.fit(SYNTHETIC)
        assert_array_equal(avg.avg_weights, avg_classifier.weights)
        # same seed, same trajectory
        assert_array_equal(raw.weights, avg.weights)
        assert_allclose(raw.avg_weights, avg.avg_weights)

    def test_average_by_hand(self):
        'average of the weights after each step'
        instances = mk_instances(("x", ["a"]), ("y", ["a"]))
        learner = PerceptronLearner(PerceptronArgs(iterations=1,
                                                   random_state=0),
                                    BagOfFeatures())
        learner.fit(instances)
        # either order gives the step weights (0, 0) then (-1, 1), or
        # (-1, 1) then (0, 0)
        assert_allclose([-0.5, 0.5], learner.avg_weights)

    def test_zero_features(self):
        'instances without features do not crash'
        instances = mk_instances(("x", []), ("y", []))
        classifier = PerceptronLearner(PerceptronArgs(iterations=2,
                                                      random_state=0),
                                       BagOfFeatures()).fit(instances)
        probs = classifier.probabilities([])
        assert_allclose([0.5, 0.5], list(probs.values()))

    def test_overflow(self):
        'weights blowing up stop training'
        instances = mk_instances(("a", 1e308), ("b", 1e308))
        learner = PerceptronLearner(PerceptronArgs(iterations=3,
                                                   random_state=0),
                                    lambda count: {"f": count})
        with np.errstate(over='ignore', invalid='ignore'):
            self.assertRaises(NumericalError, learner.fit, instances)


class BaselineTest(unittest.TestCase):
    '''
    most frequent label
    '''
    def test_baseline(self):
        'most frequent label, and the label distribution'
        classifier = MostFrequentLabelLearner().fit(SYNTHETIC)
        probs = classifier.probabilities(["anything"])
        self.assertEqual(['x', 'y', 'z'], list(probs))
        self.assertAlmostEqual(1.0, sum(probs.values()))
        self.assertEqual('x', classifier.label([]))
        self.assertEqual(('x', 2 / 6.0), classifier.confidence([]))

    def test_train(self):
        'via the central entry point'
        hyp = Hyperparameters(feature_extractor=BagOfFeatures())
        classifier = train(ANIMALS, hyp, learner=Learner.baseline)
        self.assertEqual('cat', classifier.label(['big']))


class ControlTest(unittest.TestCase):
    '''
    central learner interface
    '''
    def test_hyperparameters(self):
        'defaults, and positional fields in constructor order'
        extractor = BagOfFeatures()
        hyp = Hyperparameters(extractor)
        self.assertIs(extractor, hyp.feature_extractor)
        self.assertEqual(1.0, hyp.sigma)
        self.assertEqual(50, hyp.iterations)
        self.assertFalse(hyp.average)
        self.assertIsNone(hyp.random_state)
        hyp2 = Hyperparameters(extractor, 3.0, 20)
        self.assertEqual(hyp2, Hyperparameters._make(list(hyp2)))
        self.assertEqual(hyp2, Hyperparameters(*hyp2))
        self.assertEqual(3.0, hyp2.sigma)
        self.assertEqual(hyp2, hyp2._replace(iterations=20))
