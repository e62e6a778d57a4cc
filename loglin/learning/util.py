"""
Utility classes functions shared by learners
"""

from collections import namedtuple

import numpy as np
from scipy.special import logsumexp

from ..encoding import (IndexLinearizer,
                        build_encoding,
                        encode_data)

# pylint: disable=too-few-public-methods


class NumericalError(Exception):
    "A NaN or infinity crept into the numbers"

    def __init__(self, msg):
        super(NumericalError, self).__init__(msg)


def check_finite(values, what):
    """
    Raise a :py:class:`NumericalError` unless all values are finite

    Parameters
    ----------
    values: float or array(float)

    what: string
        what the values are (for the error message)

    Returns
    -------
    values: float or array(float)
        (unchanged)
    """
    if not np.all(np.isfinite(values)):
        oops = "Non-finite {} encountered: {}"
        raise NumericalError(oops.format(what, values))
    return values


def datum_scores(datum, weight_matrix):
    """
    Score of each label for a single datum

    Parameters
    ----------
    datum: EncodedDatum

    weight_matrix: 2D array(float)
        (F, L) view of the weight vector

    Returns
    -------
    scores: array(float)
        one score per label; all zeros if the datum has no active
        features
    """
    return datum.counts.dot(weight_matrix[datum.feature_ids])


def log_normalize(scores):
    """
    Turn scores into log probabilities (along the last axis) using
    a max-subtracting log-sum-exp, so that large scores neither
    overflow nor underflow.

    Returns
    -------
    log_probs: array(float)
        same shape as scores
    """
    log_z = logsumexp(scores, axis=-1, keepdims=True)
    return scores - log_z


def best_label(scores):
    """
    Index of the highest score, ties going to the lowest index
    """
    return int(np.argmax(scores))


class EncodedCorpus(namedtuple('EncodedCorpus',
                               'encoding linearizer data')):
    """
    Everything a learner needs to work in the integer domain

    Parameters
    ----------
    encoding: Encoding

    linearizer: IndexLinearizer

    data: [EncodedDatum]
    """
    @classmethod
    def build(cls, instances, feature_extractor):
        """
        Build the encoding from the instances, then encode them

        Raises
        ------
        ValueError
            if there are no instances to learn from
        """
        instances = list(instances)
        if not instances:
            raise ValueError('Need at least one training instance')
        encoding = build_encoding(instances, feature_extractor)
        return cls(encoding=encoding,
                   linearizer=IndexLinearizer.from_encoding(encoding),
                   data=encode_data(instances, feature_extractor, encoding))

    def initial_weights(self):
        "all-zero weight vector"
        return np.zeros(self.linearizer.size, dtype='d')
