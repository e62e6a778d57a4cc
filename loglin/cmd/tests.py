"""
loglin.cmd tests
"""

# pylint: disable=too-few-public-methods, no-self-use

from contextlib import redirect_stdout
from io import StringIO
from os import path as fp
import argparse
import shutil
import tempfile
import unittest

from . import (evaluate, inspect)

TRAINING = [("drug", "Aspirin"),
            ("drug", "Ibuprofen"),
            ("drug", "Paracetamol"),
            ("place", "New York"),
            ("place", "San Francisco"),
            ("place", "New Haven"),
            ("movie", "The Big Lebowski"),
            ("movie", "The Matrix")]

TESTING = [("drug", "Aspirinol"),
           ("place", "New Mexico"),
           ("movie", "The Big Sleep"),
           ("place", "Xyzzy")]


def write_instances(filename, rows):
    "tab separated label/input file"
    with open(filename, 'w', encoding='utf-8') as stream:
        for label, input_ in rows:
            print(label, input_, sep='\t', file=stream)


def run_subcommand(module, argv):
    "parse the arguments and run the subcommand, returning its stdout"
    psr = argparse.ArgumentParser()
    module.config_argparser(psr)
    args = psr.parse_args(argv)
    out = StringIO()
    with redirect_stdout(out):
        args.func(args)
    return out.getvalue()


class CmdTest(unittest.TestCase):
    '''
    running the subcommands on a tiny dataset
    '''
    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()
        self.training = fp.join(self.tmpdir, 'train.txt')
        self.testing = fp.join(self.tmpdir, 'test.txt')
        write_instances(self.training, TRAINING)
        write_instances(self.testing, TESTING)

    def tearDown(self):
        shutil.rmtree(self.tmpdir)

    def test_evaluate(self):
        'one report per learner, then a comparison'
        out = run_subcommand(evaluate,
                             [self.training, self.testing, '--quiet',
                              '-l', 'maxent', '-l', 'perceptron',
                              '-l', 'baseline',
                              '--iterations', '10', '--errors'])
        self.assertTrue('== maxent ==' in out)
        self.assertTrue('== perceptron ==' in out)
        self.assertTrue('== baseline ==' in out)
        self.assertTrue('Accuracy:' in out)
        self.assertTrue('Confusion matrix (normalized)' in out)
        self.assertTrue('corr (acc/conf)' in out)

    def test_evaluate_default(self):
        'maxent unless told otherwise'
        out = run_subcommand(evaluate,
                             [self.training, self.testing, '--quiet',
                              '--features', 'word', '--sigma', '0'])
        self.assertTrue('== maxent ==' in out)
        self.assertFalse('== perceptron ==' in out)

    def test_bad_args(self):
        'invalid hyperparameters are rejected'
        with self.assertRaises(SystemExit):
            run_subcommand(evaluate,
                           [self.training, self.testing, '--quiet',
                            '--sigma', '-1'])
        with self.assertRaises(SystemExit):
            run_subcommand(evaluate,
                           [self.training, self.testing, '--quiet',
                            '--learner', 'svm'])

    def test_inspect(self):
        'top features for each label'
        output = fp.join(self.tmpdir, 'features.txt')
        run_subcommand(inspect,
                       [self.training, '--quiet', '--top', '2',
                        '-l', 'perceptron', '-l', 'baseline',
                        '--output', output])
        with open(output, encoding='utf-8') as stream:
            text = stream.read()
        self.assertTrue('== perceptron ==' in text)
        self.assertTrue('drug' in text)
        self.assertTrue('baseline: no feature weights to show' in text)
