"show the most discriminating features of a trained model"

from ..args import (add_common_args,
                    add_learner_args, validate_learner_args,
                    args_to_learners)
from ..report import (show_discriminating_features)
from .util import (load_args_training, train_learner)

# ---------------------------------------------------------------------
# main
# ---------------------------------------------------------------------


DEFAULT_TOP = 3
'default top number of features to show'


def config_argparser(psr):
    "add subcommand arguments to subparser"

    add_common_args(psr)
    add_learner_args(psr)
    psr.add_argument("--top", metavar="N", type=int,
                     default=DEFAULT_TOP,
                     help=("show the best N features "
                           "(default: {})".format(DEFAULT_TOP)))
    psr.add_argument("--output", metavar="FILE",
                     help="output to file")
    psr.set_defaults(func=main)


@validate_learner_args
def main(args):
    "subcommand main (invoked from outer script)"
    training = load_args_training(args)
    blocks = []
    for learner in args_to_learners(args):
        classifier = train_learner(learner, training, args)
        important = getattr(classifier, 'important_features', None)
        if important is None:
            blocks.append("{}: no feature weights to show".format(
                learner.name))
            continue
        blocks.append("== {} ==\n{}".format(
            learner.name,
            show_discriminating_features(important(args.top))))
    res = '\n\n'.join(blocks)
    if args.output is None:
        print(res)
    else:
        with open(args.output, 'w', encoding='utf-8') as fout:
            print(res, file=fout)
