"""
loglin subcommands
"""

# pylint: disable=import-self
from . import\
    (evaluate,
     inspect)

SUBCOMMANDS = [evaluate,
               inspect]
