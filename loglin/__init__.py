'''
Loglin is a small toolkit for log-linear (maximum entropy) classifiers
over sparse, named features.
The API provides

    * a vocabulary encoding that maps features and labels to dense ids
    * learners (maximum entropy, perceptron, most frequent label) which,
      once fitted, become classifiers
    * support for evaluating classifiers on labeled data from the
      command line
'''
