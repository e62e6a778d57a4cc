"""
Feature extraction: from raw inputs to sparse named-feature counts

A feature extractor is anything that can be called on an input and
returns a mapping from feature (any hashable) to a non-negative count.
Extractors must be pure functions of their input, as the same
extractor is used when encoding the training data and when
classifying new inputs.
"""

from abc import ABCMeta, abstractmethod
from collections import Counter

from nltk.util import ngrams

from .util import ArgparserEnum

# pylint: disable=too-few-public-methods


class FeatureExtractor(metaclass=ABCMeta):
    '''
    Base class for feature extractors; subclasses only need to
    implement `extract`
    '''
    @abstractmethod
    def extract(self, input_):
        """
        Parameters
        ----------
        input_: object

        Returns
        -------
        features: Counter
            count for each feature that fires on the input
        """
        raise NotImplementedError

    def __call__(self, input_):
        return self.extract(input_)


class BagOfFeatures(FeatureExtractor):
    """
    Input is already a sequence of feature names; each occurrence
    counts once
    """
    def extract(self, input_):
        return Counter(input_)


def _words(text):
    "whitespace separated words of more than one character"
    return [w for w in text.split() if len(w) > 1]


class WordFeatureExtractor(FeatureExtractor):
    """
    One `word-` feature per whitespace separated word (single
    characters are ignored)
    """
    def extract(self, input_):
        return Counter('word-' + w for w in _words(input_))


class ProperNameFeatureExtractor(FeatureExtractor):
    """
    Character and word features for short strings like proper names:

    * first and last character
    * words (as in :py:class:`WordFeatureExtractor`)
    * character bigrams, with the last one also marked as such, and the
      first one too for strings of three characters or more
    * character trigrams, likewise
    """
    def extract(self, input_):
        features = Counter()
        if input_:
            features['begins-with-' + input_[0]] += 1
            features['ends-with-' + input_[-1]] += 1
        for word in _words(input_):
            features['word-' + word] += 1
        for order, prefix in [(2, 'BIGRAM-'), (3, 'TRIGRAM-')]:
            grams = [''.join(g) for g in ngrams(input_, order)]
            for gram in grams:
                features[prefix + gram] += 1
            if grams:
                if len(input_) >= 3:
                    features[prefix + 'begin-' + grams[0]] += 1
                features[prefix + 'end-' + grams[-1]] += 1
        return features


class FeatureSet(ArgparserEnum):
    '''
    Stock feature extractors for string inputs
    '''
    proper_name = 1
    word = 2


def mk_feature_extractor(feature_set):
    """
    Extractor corresponding to a :py:class:`FeatureSet`
    """
    if feature_set == FeatureSet.proper_name:
        return ProperNameFeatureExtractor()
    elif feature_set == FeatureSet.word:
        return WordFeatureExtractor()
    else:
        raise ValueError('Unknown feature set: {}'.format(feature_set))
