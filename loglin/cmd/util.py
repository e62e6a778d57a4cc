'''
Utility functions for command line tools
'''

from ..args import (args_to_hyperparameters, args_to_verbosity)
from ..io import (Torpor, load_labeled_instances)
from ..learning import train


def load_args_training(args):
    '''
    Load training data specified via command line arguments
    '''
    return load_labeled_instances(args.training,
                                  verbose=not args.quiet)


def train_learner(learner, instances, args):
    '''
    Train one of the learners requested on the command line
    '''
    hyperparameters = args_to_hyperparameters(args)
    with Torpor("Training {} classifier".format(learner.name),
                sameline=args.verbose < 2,
                quiet=args.quiet):
        return train(instances, hyperparameters,
                     learner=learner,
                     verbose=args_to_verbosity(args))
