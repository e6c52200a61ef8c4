"""
Defines the `ConvergenceWindow` used to stop training once value estimates
stop changing.
"""

from collections import deque

import numpy as np


EPSILON = float(np.finfo(float).eps)



class ConvergenceWindow(deque):
    """
    ConvergenceWindow is a `deque` of the total squared value change of the
    most recent episodes. It starts filled with infinity, so it can only report
    convergence after `size` episodes have been appended.

    This is a plateau heuristic, not a proof of convergence.

    Args:
    * size: Number of episodes remembered.
    * tolerance: Largest episode variation still considered unchanged.
    """

    def __init__(self, size: int=5, tolerance: float=EPSILON):
        self.size = size
        self.tolerance = tolerance
        super().__init__([np.inf] * size, maxlen=size)


    @property
    def converged(self) -> bool:
        """
        True when every remembered episode changed values by at most
        `tolerance`.
        """
        return all(variation <= self.tolerance for variation in self)
