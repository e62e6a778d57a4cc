"""
loglin tests
"""

# pylint: disable=too-few-public-methods, no-self-use, no-member
# no-member: numpy

from io import StringIO
import unittest

import numpy as np

from .encoding import (EncodingError,
                       IndexLinearizer,
                       Indexer,
                       InvalidStateError,
                       build_encoding,
                       encode_data,
                       encode_datum,
                       encode_labeled_datum)
from .features import (BagOfFeatures,
                       FeatureSet,
                       ProperNameFeatureExtractor,
                       WordFeatureExtractor,
                       mk_feature_extractor)
from .instance import LabeledInstance
from .io import (IoException, read_labeled_instances)
from .learning.baseline import MostFrequentLabelLearner
from .report import (ClassifierReport,
                     show_confusion_matrix,
                     show_discriminating_features)


def mk_instances(*rows):
    "labeled instances from (label, feature names) pairs"
    return [LabeledInstance(label, feats) for label, feats in rows]


ANIMALS = mk_instances(("cat", ["fuzzy", "claws", "small"]),
                       ("bear", ["fuzzy", "claws", "big"]),
                       ("cat", ["claws", "medium"]))


class EncodingTest(unittest.TestCase):
    '''
    building vocabularies and encoding data with them
    '''
    def test_first_seen_order(self):
        'ids are handed out in order of first appearance'
        enc = build_encoding(ANIMALS, BagOfFeatures())
        self.assertEqual(['fuzzy', 'claws', 'small', 'big', 'medium'],
                         list(enc.features))
        self.assertEqual(['cat', 'bear'], list(enc.labels))
        self.assertEqual(1, enc.feature_id('claws'))
        self.assertEqual(1, enc.label_id('bear'))
        self.assertEqual('big', enc.feature(3))
        self.assertEqual('cat', enc.label(0))

    def test_dense_ids(self):
        'ids are exactly [0, F) and [0, L), no gaps or duplicates'
        instances = mk_instances(("a", ["x", "y", "x"]),
                                 ("b", ["y", "z"]),
                                 ("a", []),
                                 ("c", ["w", "x"]))
        enc = build_encoding(instances, BagOfFeatures())
        fids = sorted(enc.feature_id(f) for f in ["w", "x", "y", "z"])
        lids = sorted(enc.label_id(l) for l in ["a", "b", "c"])
        self.assertEqual(list(range(enc.num_features)), fids)
        self.assertEqual(list(range(enc.num_labels)), lids)
        self.assertEqual(4, enc.num_features)
        self.assertEqual(3, enc.num_labels)

    def test_deterministic(self):
        'same input, same encoding'
        enc1 = build_encoding(ANIMALS, BagOfFeatures())
        enc2 = build_encoding(ANIMALS, BagOfFeatures())
        self.assertEqual(list(enc1.features), list(enc2.features))
        self.assertEqual(list(enc1.labels), list(enc2.labels))

    def test_frozen(self):
        'an encoding cannot grow after the fact'
        enc = build_encoding(ANIMALS, BagOfFeatures())
        self.assertRaises(EncodingError, enc.features.add, 'scales')
        # but looking up known items is fine
        self.assertEqual(0, enc.features.add('fuzzy'))

    def test_indexer(self):
        'indexers are bijections'
        idx = Indexer(['a', 'b', 'a', 'c'])
        self.assertEqual(3, len(idx))
        self.assertEqual(['a', 'b', 'c'], list(idx))
        self.assertEqual('b', idx[1])
        self.assertTrue('c' in idx)
        self.assertIsNone(idx.index_of('d'))

    def test_unknown_features(self):
        'unseen features are silently dropped'
        enc = build_encoding(ANIMALS, BagOfFeatures())
        datum = encode_datum({'scales': 1, 'claws': 2, 'wings': 1}, enc)
        self.assertEqual([(1, 2.0)], list(datum.active_features()))
        empty = encode_datum({'scales': 1, 'wings': 3}, enc)
        self.assertEqual(0, empty.num_active_features)
        self.assertEqual([], list(empty.active_features()))

    def test_labels(self):
        'labeled and unlabeled data'
        enc = build_encoding(ANIMALS, BagOfFeatures())
        datum = encode_labeled_datum({'big': 1}, 'bear', enc)
        self.assertTrue(datum.is_labeled)
        self.assertEqual(1, datum.label)
        self.assertRaises(EncodingError,
                          encode_labeled_datum, {'big': 1}, 'dog', enc)
        unlabeled = encode_datum({'big': 1}, enc)
        self.assertFalse(unlabeled.is_labeled)
        with self.assertRaises(InvalidStateError):
            unlabeled.label  # pylint: disable=pointless-statement

    def test_negative_count(self):
        'counts may not be negative'
        enc = build_encoding(ANIMALS, BagOfFeatures())
        self.assertRaises(EncodingError, encode_datum, {'big': -1}, enc)

    def test_encode_data(self):
        'whole corpus'
        extractor = BagOfFeatures()
        enc = build_encoding(ANIMALS, extractor)
        data = encode_data(ANIMALS, extractor, enc)
        self.assertEqual([0, 1, 0], [d.label for d in data])
        self.assertEqual([(1, 1.0), (4, 1.0)],
                         list(data[2].active_features()))

    def test_linearizer(self):
        'pair <-> offset'
        lin = IndexLinearizer(num_features=4, num_labels=3)
        self.assertEqual(12, lin.size)
        self.assertEqual((4, 3), lin.shape)
        self.assertEqual(7, lin.linear_index(2, 1))
        self.assertEqual(2, lin.feature_index(7))
        self.assertEqual(1, lin.label_index(7))
        offsets = [lin.linear_index(f, l)
                   for f in range(4) for l in range(3)]
        self.assertEqual(list(range(12)), sorted(offsets))
        for i in range(lin.size):
            self.assertEqual(i, lin.linear_index(*lin.pair(i)))
        # same layout as a C-ordered matrix
        weights = np.arange(lin.size)
        self.assertEqual(weights[lin.linear_index(3, 2)],
                         weights.reshape(lin.shape)[3, 2])


class FeatureTest(unittest.TestCase):
    '''
    stock feature extractors
    '''
    def test_bag(self):
        'repeated features are counted'
        feats = BagOfFeatures()(['a', 'b', 'a'])
        self.assertEqual({'a': 2, 'b': 1}, dict(feats))

    def test_words(self):
        'single characters are not words'
        feats = WordFeatureExtractor()('Mr X Smith  Smith')
        self.assertEqual({'word-Mr': 1, 'word-Smith': 2}, dict(feats))

    def test_proper_name(self):
        'character and word features'
        feats = ProperNameFeatureExtractor()('Oxo')
        self.assertEqual(1, feats['begins-with-O'])
        self.assertEqual(1, feats['ends-with-o'])
        self.assertEqual(1, feats['word-Oxo'])
        self.assertEqual(1, feats['BIGRAM-Ox'])
        self.assertEqual(1, feats['BIGRAM-begin-Ox'])
        self.assertEqual(1, feats['BIGRAM-end-xo'])
        self.assertEqual(1, feats['TRIGRAM-Oxo'])
        self.assertEqual(1, feats['TRIGRAM-begin-Oxo'])
        self.assertEqual(1, feats['TRIGRAM-end-Oxo'])

    def test_proper_name_short(self):
        'short and empty inputs do not crash'
        self.assertEqual({}, dict(ProperNameFeatureExtractor()('')))
        feats = ProperNameFeatureExtractor()('A')
        self.assertEqual({'begins-with-A': 1, 'ends-with-A': 1},
                         dict(feats))
        # two characters: no begin marker
        feats = ProperNameFeatureExtractor()('Ox')
        self.assertEqual(1, feats['BIGRAM-Ox'])
        self.assertEqual(1, feats['BIGRAM-end-Ox'])
        self.assertFalse('BIGRAM-begin-Ox' in feats)

    def test_feature_set(self):
        'command line names for extractors'
        self.assertEqual(FeatureSet.proper_name,
                         FeatureSet.from_string('proper-name'))
        self.assertTrue(isinstance(mk_feature_extractor(FeatureSet.word),
                                   WordFeatureExtractor))


class IoTest(unittest.TestCase):
    '''
    reading data files
    '''
    def test_read(self):
        'tab separated rows, blank lines skipped'
        stream = StringIO('drug\tAspirin\n\nplace\tNew "York" City\n')
        instances = read_labeled_instances(stream)
        self.assertEqual([LabeledInstance('drug', 'Aspirin'),
                          LabeledInstance('place', 'New "York" City')],
                         instances)

    def test_whitespace_rows(self):
        'rows with nothing but whitespace count as blank'
        stream = StringIO('a\tfoo\n   \n\t\nb\tbar\n')
        instances = read_labeled_instances(stream)
        self.assertEqual([LabeledInstance('a', 'foo'),
                          LabeledInstance('b', 'bar')],
                         instances)

    def test_malformed(self):
        'wrong number of fields'
        stream = StringIO('drug\tAspirin\nplace\n')
        self.assertRaises(IoException, read_labeled_instances, stream)


class ReportTest(unittest.TestCase):
    '''
    scoring classifiers
    '''
    def test_baseline_report(self):
        'most frequent label on a small test set'
        training = mk_instances(("a", "x"), ("a", "y"), ("b", "z"))
        testing = mk_instances(("a", "u"), ("b", "v"), ("a", "w"),
                               ("c", "t"))
        classifier = MostFrequentLabelLearner().fit(training)
        report = ClassifierReport.evaluate(classifier, testing)
        self.assertEqual(2, report.correct)
        self.assertEqual(4, report.total)
        self.assertAlmostEqual(0.5, report.accuracy)
        # constant confidence: no correlation
        self.assertIsNone(report.correlation)
        self.assertEqual(['a', 'b', 'c'], report.labels)
        self.assertEqual([[2, 0, 0],
                          [1, 0, 0],
                          [1, 0, 0]],
                         report.confusion.tolist())
        self.assertEqual(2, len(report.errors))
        self.assertEqual('b', report.errors[0].gold)
        norm = report.normalized_confusion()
        self.assertEqual([1.0, 0.0, 0.0], norm[1].tolist())
        text = report.table()
        self.assertTrue('Accuracy: 0.5000' in text)

    def test_correlation(self):
        'confidence tracking correctness'
        report = ClassifierReport(labels=['a', 'b'],
                                  gold=['a', 'b', 'a', 'b'],
                                  predicted=['a', 'b', 'b', 'a'],
                                  confidence=[0.9, 0.8, 0.6, 0.5],
                                  errors=[])
        self.assertTrue(report.correlation > 0)

    def test_empty(self):
        'no test data'
        report = ClassifierReport(labels=['a'], gold=[], predicted=[],
                                  confidence=[], errors=[])
        self.assertEqual(0, report.accuracy)
        self.assertEqual([[0]], report.confusion.tolist())

    def test_show(self):
        'tables render'
        matrix = np.array([[3, 0], [1, 2]])
        text = show_confusion_matrix(['cat', 'bear'], matrix)
        self.assertTrue('<3>' in text)
        text = show_discriminating_features([('cat', [('claws', 1.5),
                                                      ('small', 0.5)]),
                                             ('bear', [])])
        self.assertTrue('claws' in text)
