"""
Toy maximum entropy run: learn to tell cats from bears
"""

from loglin.features import BagOfFeatures
from loglin.instance import LabeledInstance
from loglin.learning import (Hyperparameters, train)

# pylint: disable=invalid-name

training = [LabeledInstance("cat", ["fuzzy", "claws", "small"]),
            LabeledInstance("bear", ["fuzzy", "claws", "big"]),
            LabeledInstance("cat", ["claws", "medium"])]
test = LabeledInstance("cat", ["claws", "small"])

classifier = train(training,
                   Hyperparameters(feature_extractor=BagOfFeatures(),
                                   sigma=3.0,
                                   iterations=20))
print("Probabilities on test instance:",
      dict(classifier.probabilities(test.input)))
