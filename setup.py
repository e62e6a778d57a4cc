'''
loglin installation
'''

from setuptools import setup, find_packages

setup(name="loglin",
      version="0.1",
      packages=find_packages(exclude=["scripts",
                                      "example",
                                      "tests"]),
      scripts=["scripts/loglin"],
      install_requires=['nltk',
                        'numpy',
                        'scikit-learn',
                        'scipy >= 1.0',
                        'tabulate'],
      extras_require={'test': ['pytest']})
