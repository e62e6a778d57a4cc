r"""
The maximum entropy objective function

This is the (negative) log conditional likelihood of the training
data, with an optional L2 penalty on the weights. The objective is
MINIMIZED, so it is the negative of what we normally think of as the
likelihood.

Notation
--------
For a datum `i` with gold label `y_i` and active features `f` with
counts `c_{i,f}`, and a weight vector `w` viewed as an `(F, L)`
matrix `W`:

.. math::

    score(i, l) = \sum_f c_{i,f} W[f, l]

    \log Z_i = \log \sum_l \exp score(i, l)

    J(w) = \sum_i (\log Z_i - score(i, y_i))
           + \frac{\sigma^2}{2} ||w||^2

    \frac{\partial J}{\partial W[f, l]}
        = \sum_i c_{i,f} (P(l | i) - [y_i = l]) + \sigma^2 W[f, l]

where `P(l | i) = exp(score(i, l) - log Z_i)`.

A `sigma` of zero turns the penalty off altogether.
"""

import numpy as np
import scipy.sparse
from scipy.special import logsumexp

from .util import check_finite

# pylint: disable=invalid-name
# lots of mathy things here, so names may follow those conventions


def count_matrix(data, num_features):
    """
    Stack encoded data into a sparse (datum x feature) count matrix

    Parameters
    ----------
    data: [EncodedDatum]

    num_features: int

    Returns
    -------
    X: scipy.sparse.csr_matrix
    """
    indptr = np.zeros(len(data) + 1, dtype=np.intp)
    indptr[1:] = np.cumsum([d.num_active_features for d in data])
    if data:
        indices = np.concatenate([d.feature_ids for d in data])
        values = np.concatenate([d.counts for d in data])
    else:
        indices = np.zeros(0, dtype=np.intp)
        values = np.zeros(0, dtype='d')
    return scipy.sparse.csr_matrix((values, indices, indptr),
                                   shape=(len(data), num_features))


class MaxentObjective(object):
    """
    Differentiable maximum entropy objective over a fixed, encoded
    corpus.

    Value and gradient are computed together and cached for the
    last point queried, as minimizers tend to ask for both at the
    same point in separate calls.

    Parameters
    ----------
    encoding: Encoding

    data: [EncodedDatum]
        labeled training data

    linearizer: IndexLinearizer

    sigma: float
        Regularization strength; 0 for no penalty
    """
    def __init__(self, encoding, data, linearizer, sigma):
        self.encoding = encoding
        self.linearizer = linearizer
        self.sigma = sigma
        self._X = count_matrix(data, linearizer.num_features)
        self._gold = np.array([d.label for d in data], dtype=np.intp)
        self._rows = np.arange(len(data))
        self._last_x = None
        self._last_value = None
        self._last_gradient = None

    @property
    def dimension(self):
        "length of the weight vectors we work with"
        return self.linearizer.size

    def value_at(self, x):
        "objective at the given weight vector"
        self._ensure_cache(x)
        return self._last_value

    def gradient_at(self, x):
        "gradient at the given weight vector (a fresh array)"
        self._ensure_cache(x)
        return self._last_gradient.copy()

    def value_and_gradient_at(self, x):
        "(objective, gradient) pair"
        self._ensure_cache(x)
        return self._last_value, self._last_gradient.copy()

    def _ensure_cache(self, x):
        if self._last_x is None or not np.array_equal(self._last_x, x):
            value, gradient = self._calculate(np.asarray(x, dtype='d'))
            self._last_value = value
            self._last_gradient = gradient
            # copy: minimizers may reuse the array in place
            self._last_x = np.array(x, dtype='d', copy=True)

    def _calculate(self, x):
        """
        (negative, penalized) log likelihood of the data, and its
        derivatives wrt each weight
        """
        W = x.reshape(self.linearizer.shape)
        scores = check_finite(self._X.dot(W), 'scores')
        log_z = logsumexp(scores, axis=1)
        gold_scores = scores[self._rows, self._gold]
        value = float(np.sum(log_z - gold_scores))

        # posterior minus empirical (one-hot) label distribution
        delta = np.exp(scores - log_z[:, np.newaxis])
        delta[self._rows, self._gold] -= 1.0
        gradient = np.asarray(self._X.T.dot(delta)).reshape(-1)

        if self.sigma:
            sigma2 = self.sigma * self.sigma
            value += 0.5 * sigma2 * float(x.dot(x))
            gradient += sigma2 * x

        check_finite(value, 'objective value')
        check_finite(gradient, 'gradient')
        return value, gradient
