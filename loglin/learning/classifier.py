"""
Linear classifiers over an encoded feature space

Both the maximum entropy and the perceptron learners produce one of
these: a frozen weight vector along with the encoding and feature
extractor needed to interpret new inputs.
"""

from collections import OrderedDict

import numpy as np

from ..encoding import encode_datum
from .interface import ProbabilisticClassifier
from .util import (best_label, check_finite, datum_scores, log_normalize)

# pylint: disable=too-few-public-methods


class LinearClassifier(ProbabilisticClassifier):
    """
    Log-linear classifier: label scores are linear in the features
    and are turned into probabilities with a softmax.

    The classifier holds on to a read-only copy of its weights, so it
    can safely be shared between readers.

    Parameters
    ----------
    weights: array(float)
        flat weight vector, laid out according to the linearizer

    encoding: Encoding

    linearizer: IndexLinearizer

    feature_extractor: callable
        input -> mapping from feature to count
    """
    def __init__(self, weights, encoding, linearizer, feature_extractor,
                 name='linear'):
        weights = np.array(weights, dtype='d', copy=True)
        if weights.shape != (linearizer.size,):
            oops = ("Weight vector has shape {}, but the linearizer "
                    "expects ({},)")
            raise ValueError(oops.format(weights.shape, linearizer.size))
        weights.flags.writeable = False
        self._weights = weights
        self._weight_matrix = weights.reshape(linearizer.shape)
        self.encoding = encoding
        self.linearizer = linearizer
        self.feature_extractor = feature_extractor
        self.name = name

    @property
    def weights(self):
        "the (read-only) weight vector"
        return self._weights

    @property
    def labels(self):
        "labels this classifier can emit, in id order"
        return list(self.encoding.labels)

    def weight(self, feature, label):
        """
        Weight associated with a (feature, label) pair; 0 for
        features outside of the vocabulary
        """
        feature_id = self.encoding.feature_id(feature)
        if feature_id is None:
            return 0.0
        label_id = self.encoding.label_id(label)
        return float(self._weights[self.linearizer.linear_index(feature_id,
                                                                label_id)])

    def encode(self, input_):
        "extract features from the input and encode them"
        return encode_datum(self.feature_extractor(input_), self.encoding)

    def scores(self, input_):
        """
        Raw score (activation) of each label for the input

        Returns
        -------
        scores: array(float)
            one per label, in label id order
        """
        scores = datum_scores(self.encode(input_), self._weight_matrix)
        return check_finite(scores, 'scores')

    def log_probabilities(self, input_):
        """
        Log probability of each label for the input, in label id
        order
        """
        return log_normalize(self.scores(input_))

    def probabilities(self, input_):
        log_probs = self.log_probabilities(input_)
        return OrderedDict((self.encoding.label(i), float(p))
                           for i, p in enumerate(np.exp(log_probs)))

    def label(self, input_):
        return self.encoding.label(best_label(self.scores(input_)))

    def important_features(self, top_n):
        """
        The highest weighted features for each label

        Returns
        -------
        listing: [(label, [(feature, float)])]
            labels in id order; features best first
        """
        listing = []
        for label_id, label in enumerate(self.encoding.labels):
            column = self._weight_matrix[:, label_id]
            best_idxes = np.argsort(-column, kind='stable')[:top_n]
            listing.append((label,
                            [(self.encoding.feature(i), float(column[i]))
                             for i in best_idxes]))
        return listing
