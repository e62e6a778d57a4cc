"""
Labeled instances: the raw material learners are trained on
"""

from collections import namedtuple

# pylint: disable=too-few-public-methods


class LabeledInstance(namedtuple('LabeledInstance', 'label input')):
    """
    An input of arbitrary shape (a name, a list of tokens, ...)
    paired with the label it should be classified as.

    The input is opaque to the learners; only the feature extractor
    ever looks inside it.

    Parameters
    ----------
    label: hashable
        Gold label

    input: object
        Anything the feature extractor knows how to handle
    """
    def __str__(self):
        return '{}\t{}'.format(self.label, self.input)
