"""
Loading data, and keeping the user posted while we do things
"""

import csv
import sys
import time

from .instance import LabeledInstance

# pylint: disable=too-few-public-methods


class IoException(Exception):
    """
    Exceptions related to reading/writing data
    """
    def __init__(self, msg):
        super(IoException, self).__init__(msg)

# ---------------------------------------------------------------------
# feedback
# ---------------------------------------------------------------------


# pylint: disable=redefined-builtin, invalid-name
class Torpor(object):
    """
    Announce that we're about to do something, then do it,
    then say we're done.

    Usage: ::

        with Torpor("doing a slow thing"):
            some_slow_thing

    Output (1): ::

        doing a slow thing...

    Output (2a): ::

        doing a slow thing... done [12 ms]

    Output (2b): ::

        doing a slow thing... ERROR!

    (the exception is then left to propagate)

    :param quiet: True to skip the message altogether
    """
    def __init__(self, msg,
                 sameline=True,
                 quiet=False,
                 file=sys.stderr):
        self._msg = msg
        self._file = file
        self._sameline = sameline
        self._quiet = quiet
        self._start = 0
        self._end = 0

    def __enter__(self):
        # wall time, not process time: IO counts too
        self._start = time.time()
        if self._quiet:
            return
        elif self._sameline:
            print(self._msg, end="... ", file=self._file)
        else:
            print("[start]", self._msg, file=self._file)

    def __exit__(self, type, value, tb):
        self._end = time.time()
        if tb is None:
            if not self._quiet:
                done = "done" if self._sameline else "[-end-] " + self._msg
                ms_elapsed = 1000 * (self._end - self._start)
                final_msg = "{} [{:.0f} ms]".format(done, ms_elapsed)
                print(final_msg, file=self._file)
        else:
            if not self._quiet:
                oops = "ERROR!" if self._sameline else "ERROR! " + self._msg
                print(oops, file=self._file)
# pylint: enable=redefined-builtin, invalid-name


# ---------------------------------------------------------------------
# tables
# ---------------------------------------------------------------------


def read_labeled_instances(instream, source='<stream>'):
    """
    Read labeled instances from tab separated `label<TAB>input` rows;
    blank (or whitespace only) rows are skipped

    :rtype: [LabeledInstance]
    """
    def read_row(lineno, row):
        'interpret a single row'
        if len(row) != 2:
            oops = ('Line {lineno} of {source} has {num} tab separated '
                    'fields instead of the expected 2: {row}')
            raise IoException(oops.format(lineno=lineno,
                                          source=source,
                                          num=len(row),
                                          row=row))
        label, input_ = row
        return LabeledInstance(label=label, input=input_)

    reader = csv.reader(instream, dialect=csv.excel_tab,
                        quoting=csv.QUOTE_NONE)
    return [read_row(reader.line_num, r) for r in reader
            if any(f.strip() for f in r)]


def load_labeled_instances(filename, verbose=False):
    """
    Read labeled instances from a tab separated file
    (see :py:func:`read_labeled_instances`)

    :rtype: [LabeledInstance]
    """
    with Torpor("Reading instances from {}".format(filename),
                quiet=not verbose):
        with open(filename, 'r', encoding='utf-8', newline='') as instream:
            return read_labeled_instances(instream, source=filename)
