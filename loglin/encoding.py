"""
Dense integer encodings of features and labels

Learners think about weights as being indexed by (feature, label)
pairs, where features and labels are arbitrary hashable objects.
The numerical code on the other hand wants one long flat vector.
This module bridges the two:

* an :py:class:`Encoding` interns features and labels seen in the
  training data into ids `[0, F)` and `[0, L)`
* an :py:class:`IndexLinearizer` maps a (feature id, label id) pair
  to an offset in a flat vector of size `F * L` (and back)
* an :py:class:`EncodedDatum` is the sparse, id-based version of a
  feature count vector, optionally labeled
"""

from collections import namedtuple

import numpy as np

# pylint: disable=too-few-public-methods


class EncodingError(Exception):
    "Something we were asked to encode has no place in the encoding"

    def __init__(self, msg):
        super(EncodingError, self).__init__(msg)


class InvalidStateError(Exception):
    "An object was used in a way its current state does not allow"

    def __init__(self, msg):
        super(InvalidStateError, self).__init__(msg)


# ---------------------------------------------------------------------
# vocabulary
# ---------------------------------------------------------------------


class Indexer(object):
    """
    Bijection between hashable objects and `[0, len(self))`,
    ids being handed out in order of first appearance.

    Once frozen, an indexer refuses to grow.
    """
    def __init__(self, items=None):
        self._objects = []
        self._indices = {}
        self._frozen = False
        for item in items or []:
            self.add(item)

    def add(self, item):
        """
        Return the id of `item`, allocating a fresh one if it has
        not been seen before
        """
        idx = self._indices.get(item)
        if idx is not None:
            return idx
        if self._frozen:
            oops = "Can't add {!r} to a frozen indexer".format(item)
            raise EncodingError(oops)
        idx = len(self._objects)
        self._objects.append(item)
        self._indices[item] = idx
        return idx

    def freeze(self):
        "Forbid further additions (returns self)"
        self._frozen = True
        return self

    def index_of(self, item):
        "id of the item, or None if it was never added"
        return self._indices.get(item)

    def __getitem__(self, idx):
        return self._objects[idx]

    def __contains__(self, item):
        return item in self._indices

    def __len__(self):
        return len(self._objects)

    def __iter__(self):
        return iter(self._objects)


class Encoding(namedtuple('Encoding', 'features labels')):
    """
    Correspondence between the object-based representation of
    features/labels and their integer ids

    Parameters
    ----------
    features: Indexer
    labels: Indexer
    """
    @property
    def num_features(self):
        "number of distinct features (F)"
        return len(self.features)

    @property
    def num_labels(self):
        "number of distinct labels (L)"
        return len(self.labels)

    def feature_id(self, feature):
        "id of a feature, or None if it is not part of the vocabulary"
        return self.features.index_of(feature)

    def feature(self, feature_id):
        "feature associated with the id"
        return self.features[feature_id]

    def label_id(self, label):
        """
        id of a label

        Raises
        ------
        EncodingError
            if the label was not seen when building the encoding
        """
        idx = self.labels.index_of(label)
        if idx is None:
            oops = ("The label {!r} was not seen in the training data "
                    "(known labels: {})")
            raise EncodingError(oops.format(label, list(self.labels)))
        return idx

    def label(self, label_id):
        "label associated with the id"
        return self.labels[label_id]


def build_encoding(instances, feature_extractor):
    """
    Scan the labeled instances once, assigning ids to every label and
    feature in order of first appearance (instance by instance, and
    within an instance, in the iteration order of its features).

    Parameters
    ----------
    instances: iterable of LabeledInstance

    feature_extractor: callable
        input -> mapping from feature to count

    Returns
    -------
    encoding: Encoding
        frozen encoding
    """
    features = Indexer()
    labels = Indexer()
    for instance in instances:
        labels.add(instance.label)
        for feature in feature_extractor(instance.input):
            features.add(feature)
    return Encoding(features=features.freeze(),
                    labels=labels.freeze())


# ---------------------------------------------------------------------
# linearization
# ---------------------------------------------------------------------


class IndexLinearizer(namedtuple('IndexLinearizer',
                                 'num_features num_labels')):
    """
    Linearization of the two-dimensional features-by-labels space
    into a flat vector, labels varying fastest.

    This is the same layout as a C-ordered `(F, L)` matrix, so a
    flat weight vector `w` can be viewed as `w.reshape(F, L)`
    """
    @classmethod
    def from_encoding(cls, encoding):
        "linearizer sized to fit the encoding"
        return cls(num_features=encoding.num_features,
                   num_labels=encoding.num_labels)

    @property
    def size(self):
        "number of (feature, label) pairs"
        return self.num_features * self.num_labels

    @property
    def shape(self):
        "(F, L), for viewing flat vectors as matrices"
        return (self.num_features, self.num_labels)

    def linear_index(self, feature_id, label_id):
        "offset of the (feature, label) pair"
        return label_id + feature_id * self.num_labels

    def feature_index(self, linear_index):
        "feature id part of an offset"
        return linear_index // self.num_labels

    def label_index(self, linear_index):
        "label id part of an offset"
        return linear_index % self.num_labels

    def pair(self, linear_index):
        "(feature id, label id) for an offset"
        return divmod(linear_index, self.num_labels)


# ---------------------------------------------------------------------
# sparse data
# ---------------------------------------------------------------------


class EncodedDatum(namedtuple('EncodedDatum',
                              'label_id feature_ids counts')):
    """
    Sparse representation of a (possibly labeled) feature count
    vector.

    Parameters
    ----------
    label_id: int or None
        None marks an unlabeled datum (eg. something we want
        to classify)

    feature_ids: array(int)
        ids of the active features, each appearing once

    counts: array(float)
        count of each active feature
    """
    @property
    def label(self):
        """
        Gold label id

        Raises
        ------
        InvalidStateError
            if this datum is unlabeled
        """
        if self.label_id is None:
            raise InvalidStateError("Asked for the label of an "
                                    "unlabeled datum")
        return self.label_id

    @property
    def is_labeled(self):
        "True if the datum carries a gold label"
        return self.label_id is not None

    @property
    def num_active_features(self):
        "number of features with a known id"
        return len(self.feature_ids)

    def active_features(self):
        "iterator on (feature id, count) pairs"
        return zip(self.feature_ids.tolist(), self.counts.tolist())


def encode_datum(feature_counts, encoding):
    """
    Encode a feature count vector as an unlabeled datum.

    Features that are not in the encoding are silently dropped:
    an unseen feature simply contributes nothing to any score.

    Parameters
    ----------
    feature_counts: mapping from feature to float

    encoding: Encoding

    Returns
    -------
    datum: EncodedDatum
    """
    ids = []
    counts = []
    for feature, count in feature_counts.items():
        if count < 0:
            oops = "Negative count {} for feature {!r}"
            raise EncodingError(oops.format(count, feature))
        idx = encoding.feature_id(feature)
        if idx is None:
            continue
        ids.append(idx)
        counts.append(count)
    return EncodedDatum(label_id=None,
                        feature_ids=np.array(ids, dtype=np.intp),
                        counts=np.array(counts, dtype='d'))


def encode_labeled_datum(feature_counts, label, encoding):
    """
    Encode a feature count vector along with its label

    Raises
    ------
    EncodingError
        if the label is unknown to the encoding
    """
    datum = encode_datum(feature_counts, encoding)
    return datum._replace(label_id=encoding.label_id(label))


def encode_data(instances, feature_extractor, encoding):
    """
    Encode a collection of labeled instances

    Returns
    -------
    data: [EncodedDatum]
    """
    return [encode_labeled_datum(feature_extractor(x.input),
                                 x.label,
                                 encoding)
            for x in instances]
