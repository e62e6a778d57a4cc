"""
Gradient based minimization of differentiable objectives

We do not implement any optimisation algorithm ourselves; this is a
thin layer over the L-BFGS-B implementation in `scipy.optimize`
which adapts it to objects exposing `value_at` and `gradient_at`.
"""

import sys
import time

import numpy as np
from scipy.optimize import minimize

DEFAULT_TOLERANCE = 1e-4
"convergence tolerance, unless told otherwise"


class LbfgsMinimizer(object):
    """
    Limited memory BFGS minimizer

    Parameters
    ----------
    max_iterations: int
        Cap on the number of L-BFGS iterations; reaching it is not
        an error, we just return the best point found so far

    verbose: int, optional
        Verbosity level

    Attributes
    ----------
    history: [float]
        objective value at each accepted iterate of the last call
        to `minimize` (starting with the initial point)

    converged: bool
        whether the last call to `minimize` met its tolerance
    """
    def __init__(self, max_iterations, verbose=0):
        self.max_iterations = max_iterations
        self.verbose = verbose
        self.history = []
        self.converged = False

    def minimize(self, objective, initial, tolerance=DEFAULT_TOLERANCE):
        """
        Parameters
        ----------
        objective: object
            must provide `value_at(x)` and `value_and_gradient_at(x)`

        initial: array(float)
            starting point

        tolerance: float
            stop when the relative improvement of the objective or the
            largest gradient component falls below this

        Returns
        -------
        x: array(float)
            best point found
        """
        x0 = np.array(initial, dtype='d', copy=True)
        best = [objective.value_at(x0), x0]
        self.history = [best[0]]
        self.converged = False
        if x0.size == 0:
            # nothing to optimise
            self.converged = True
            return x0

        verbose = self.verbose
        if verbose > 1:
            print("-" * 100, file=sys.stderr)
            print("Minimizing (dim {})...".format(x0.size), file=sys.stderr)
            start_time = time.time()

        def record(xk):
            "note the value at each accepted iterate"
            value = objective.value_at(xk)
            self.history.append(value)
            if value <= best[0]:
                best[0] = value
                best[1] = np.array(xk, copy=True)
            if verbose > 1:
                print("it. %3s \tvalue = %-7s" % (len(self.history) - 1,
                                                   round(value, 6)),
                      file=sys.stderr)

        result = minimize(objective.value_and_gradient_at, x0,
                          jac=True,
                          method='L-BFGS-B',
                          callback=record,
                          options={'maxiter': self.max_iterations,
                                   'ftol': tolerance,
                                   'gtol': tolerance})
        self.converged = bool(result.success)
        if verbose and not result.success:
            print("L-BFGS did not converge:", result.message,
                  file=sys.stderr)
        if verbose > 1:
            elapsed_time = time.time() - start_time
            print("done in %s sec." % round(elapsed_time, 3),
                  file=sys.stderr)

        final_value = objective.value_at(result.x)
        if final_value <= best[0]:
            return np.array(result.x, copy=True)
        return best[1]
