"""
Managing command line arguments
"""

from functools import wraps
import sys

from .features import (FeatureSet, mk_feature_extractor)
from .learning import (Hyperparameters, Learner)
from .learning.minimize import DEFAULT_TOLERANCE

# pylint: disable=too-few-public-methods

DEFAULT_LEARNER = Learner.maxent
DEFAULT_FEATURE_SET = FeatureSet.proper_name
DEFAULT_SIGMA = 1.5
DEFAULT_ITERATIONS = 40
DEFAULT_SEED = 0

# ---------------------------------------------------------------------
# argparse
# ---------------------------------------------------------------------


def add_common_args(psr):
    "add usual loglin args to subcommand parser"

    psr.add_argument("training", metavar="FILE",
                     help="training data (tab separated: label, input)")
    psr.add_argument("--verbose", "-v", action="count", default=0,
                     help="more feedback on the learning process "
                     "(repeat for even more)")
    psr.add_argument("--quiet", action="store_true",
                     help="Supress all feedback")


def add_learner_args(psr):
    """
    add classifier learner arguments
    """
    psr.add_argument("--learner", "-l", metavar="STRING",
                     type=Learner.from_string,
                     action="append",
                     help="learner (may be repeated) " +
                     Learner.help_suffix(DEFAULT_LEARNER))
    psr.add_argument("--features", "-f", metavar="STRING",
                     type=FeatureSet.from_string,
                     default=DEFAULT_FEATURE_SET,
                     help="feature extractor " +
                     FeatureSet.help_suffix(DEFAULT_FEATURE_SET))

    maxent_grp = psr.add_argument_group('maxent arguments')
    maxent_grp.add_argument("--sigma", metavar="FLOAT", type=float,
                            default=DEFAULT_SIGMA,
                            help="strength of the L2 penalty; 0 for none "
                            "(default: {})".format(DEFAULT_SIGMA))
    maxent_grp.add_argument("--tolerance", metavar="FLOAT", type=float,
                            default=DEFAULT_TOLERANCE,
                            help="minimizer convergence tolerance "
                            "(default: {})".format(DEFAULT_TOLERANCE))

    perc_grp = psr.add_argument_group('perceptron arguments')
    perc_grp.add_argument("--average", action="store_true",
                          help="use averaged perceptron weights")
    perc_grp.add_argument("--seed", metavar="INT", type=int,
                          default=DEFAULT_SEED,
                          help="random seed for shuffling the training "
                          "data (default: {})".format(DEFAULT_SEED))
    perc_grp.add_argument("--shuffle", action="store_true",
                          help="if set, shuffle differently on each run "
                          "(ignores --seed)")

    psr.add_argument("--iterations", "-i", metavar="INT", type=int,
                     default=DEFAULT_ITERATIONS,
                     help="maximum minimizer iterations (maxent) or "
                     "epochs (perceptron) "
                     "(default: {})".format(DEFAULT_ITERATIONS))


def validate_learner_args(wrapped):
    """
    Given a function that accepts an argparsed object, check
    the learner arguments before carrying on.

    This is meant to be used as a decorator, eg.::

        @validate_learner_args
        def main(args):
            blah
    """
    @wraps(wrapped)
    def inner(args):
        "die if learner are invalid"
        if args.sigma < 0:
            sys.exit("arg error: --sigma must be >= 0")
        if args.iterations < 1:
            sys.exit("arg error: --iterations must be >= 1")
        if args.tolerance <= 0:
            sys.exit("arg error: --tolerance must be > 0")
        wrapped(args)
    return inner


# ---------------------------------------------------------------------
# interpretation
# ---------------------------------------------------------------------


def args_to_learners(args):
    """
    Learners requested on the command line, in order

    :rtype [Learner]
    """
    return args.learner or [DEFAULT_LEARNER]


def args_to_feature_extractor(args):
    """
    Feature extractor requested on the command line
    """
    return mk_feature_extractor(args.features)


def args_to_hyperparameters(args):
    """
    Training configuration given the command line arguments

    :rtype Hyperparameters
    """
    return Hyperparameters(
        feature_extractor=args_to_feature_extractor(args),
        sigma=args.sigma,
        iterations=args.iterations,
        tolerance=args.tolerance,
        average=args.average,
        random_state=None if args.shuffle else args.seed)


def args_to_verbosity(args):
    """
    Verbosity level for learners (0 if --quiet)
    """
    return 0 if args.quiet else args.verbose
