"""
Defines the random number source used by policies for exploration.
"""

from typing import Union

import numpy as np
from numpy.random import RandomState



class RandomSource:
    """
    An object that generates uniformly distributed numbers in [0, 1). Any
    object with a `random()` method of that contract can be used in its place.
    """

    def random(self) -> float:
        raise NotImplementedError



class NumpyRandom(RandomSource):
    """
    A `RandomSource` backed by `numpy.random.RandomState`.

    Args:
    * seed: An `int` seed or a `RandomState` instance used for all random
    number generation in the instance. Default is None.
    """

    def __init__(self, seed: Union[int, RandomState]=None):
        if isinstance(seed, RandomState):
            self.state = seed
        else:
            self.state = np.random.RandomState(seed)


    def random(self) -> float:
        return float(self.state.random_sample())
