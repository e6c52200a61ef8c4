"""
Tabular approximation of the action-value function.
"""

from typing import Hashable, Tuple

import numpy as np

from ..agent.policy import total_order_key
from ..helpers.spaces import DiscreteDomain



class Tabular:
    """
    A flat table of values for every (observation, action) pair and a parallel
    table of visit counts. Pairs are laid out observation-major:

        `index(o, a) = observations.index(o) * |actions| + actions.index(a)`

    Every estimator shares this layout, so a value function built from one
    estimator's table can improve any agent acting over the same domains.

    Args:
    * observations: The `DiscreteDomain` of observations.
    * actions: The `DiscreteDomain` of actions.
    * default (float): Initial value of every pair. Default 0.

    Attributes:
    * values: 1D float array of length `|observations| * |actions|`.
    * visits: 1D int array of visit counts of the same length.
    """

    def __init__(self, observations: DiscreteDomain, actions: DiscreteDomain,
                 default: float=0.):
        self.observations = observations
        self.actions = actions
        self.default = default
        size = len(observations) * len(actions)
        self.values = np.zeros(size) + default
        self.visits = np.zeros(size, dtype=int)


    def __len__(self) -> int:
        return len(self.values)


    def index(self, observation: Hashable, action: Hashable) -> int:
        """
        Converts an (observation, action) pair into an offset into `values`.

        Raises:
        * `DomainError` if either element is outside its domain.
        """
        return self.observations.index(observation) * len(self.actions) \
               + self.actions.index(action)


    def pair(self, index: int) -> Tuple[Hashable, Hashable]:
        """
        Reverse of `index`.
        """
        o, a = divmod(index, len(self.actions))
        return self.observations[o], self.actions[a]


    def __getitem__(self, key: Tuple[Hashable, Hashable]) -> float:
        return float(self.values[self.index(*key)])


    def __setitem__(self, key: Tuple[Hashable, Hashable], value: float):
        self.values[self.index(*key)] = value


    def visit(self, observation: Hashable, action: Hashable) -> int:
        """
        Increments and returns the visit count of a pair.
        """
        i = self.index(observation, action)
        self.visits[i] += 1
        return int(self.visits[i])


    def update(self, observation: Hashable, action: Hashable, value: float) -> float:
        """
        Sets the value of a pair.

        Returns:
        * The squared difference between the old and new value.
        """
        i = self.index(observation, action)
        old = self.values[i]
        self.values[i] = value
        return float((old - value) ** 2)


    def max(self, observation: Hashable) -> float:
        """
        Highest value over all actions from `observation`. NaN values lose to
        every number.
        """
        start = self.observations.index(observation) * len(self.actions)
        row = self.values[start:start + len(self.actions)]
        return float(max(row, key=total_order_key))


    def view(self) -> 'TabularView':
        return TabularView(self)


    def table(self, visits: bool=False) -> np.ndarray:
        """
        A copy of the values (or visit counts) as a 2D array of shape
        `(|observations|, |actions|)`.
        """
        source = self.visits if visits else self.values
        return source.reshape(len(self.observations), len(self.actions)).copy()



class TabularView:
    """
    A read-only value function backed by a `Tabular` instance. Calling the view
    with `(observation, action)` returns the current value of the pair.
    Handed to agents for policy improvement.
    """

    def __init__(self, tabular: Tabular):
        self._tabular = tabular


    def __call__(self, observation: Hashable, action: Hashable) -> float:
        return self._tabular[observation, action]


    def max(self, observation: Hashable) -> float:
        return self._tabular.max(observation)
