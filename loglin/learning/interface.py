"""
Common interface(s) to loglin learners and classifiers.
"""

from abc import ABCMeta, abstractmethod

__all__ = ["AbstractLearner", "ProbabilisticClassifier"]


class ProbabilisticClassifier(metaclass=ABCMeta):
    '''
    A probabilistic classifier associates inputs with a distribution
    over labels.

    Classifiers are immutable once built.
    '''
    @abstractmethod
    def probabilities(self, input_):
        """
        Parameters
        ----------
        input_: object
            Anything the classifier's feature extractor understands

        Returns
        -------
        probs: OrderedDict(label, float)
            Probability of each known label; these sum to 1
        """
        raise NotImplementedError

    @abstractmethod
    def label(self, input_):
        """
        Most probable label for the input (ties go to the label
        seen first during training)
        """
        raise NotImplementedError

    def confidence(self, input_):
        """
        (label, probability) for the most probable label
        """
        label = self.label(input_)
        return label, self.probabilities(input_)[label]


class AbstractLearner(metaclass=ABCMeta):
    '''
    Following scikit conventions, a learner is an object that, once
    fitted to some training data, gives us a classifier.
    '''
    @abstractmethod
    def fit(self, instances):
        """
        Learns a classifier from labeled instances

        Parameters
        ----------
        instances: [LabeledInstance]

        Returns
        -------
        classifier: ProbabilisticClassifier
        """
        raise NotImplementedError
