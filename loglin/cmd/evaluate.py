"train classifiers and evaluate them on held out data"

import sys

from ..args import (add_common_args,
                    add_learner_args, validate_learner_args,
                    args_to_learners)
from ..io import load_labeled_instances
from ..report import (ClassifierReport, show_reports)
from .util import (load_args_training, train_learner)


def config_argparser(psr):
    "add subcommand arguments to subparser"

    add_common_args(psr)
    add_learner_args(psr)
    psr.add_argument("testing", metavar="FILE",
                     help="test (or validation) data, same format as "
                     "the training data")
    psr.add_argument("--errors", action="store_true",
                     help="list misclassified test instances")
    psr.set_defaults(func=main)


@validate_learner_args
def main(args):
    "subcommand main (invoked from outer script)"

    training = load_args_training(args)
    testing = load_labeled_instances(args.testing, verbose=not args.quiet)
    reports = []
    for learner in args_to_learners(args):
        classifier = train_learner(learner, training, args)
        report = ClassifierReport.evaluate(classifier, testing)
        print("==", learner.name, "==")
        print(report.table())
        if args.errors and report.errors:
            print()
            print(report.errors_table())
        print()
        reports.append(report)
    if len(reports) > 1:
        print(show_reports(reports))
    sys.stdout.flush()
