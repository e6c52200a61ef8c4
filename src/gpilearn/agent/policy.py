"""
Defines the `Policy` interface and the tabular `EpsilonGreedyPolicy`.
"""

import math
from typing import Callable, Hashable, Iterable

from ..exceptions import InvalidEpsilon, UnknownObservation, DomainError
from ..helpers.spaces import DiscreteDomain
from .random import RandomSource



def total_order_key(value: float) -> float:
    """
    Maps a value onto a total order where NaN is smaller than every number.
    Unlike the IEEE 754 total order, positive NaN does not rank highest.
    """
    return -math.inf if math.isnan(value) else value



def argmax(value_function: Callable[[Hashable, Hashable], float],
           observation: Hashable, actions: Iterable[Hashable]) -> Hashable:
    """
    Finds the action with the highest value from an observation. Ties are
    broken in favor of the action enumerated first.

    Args:
    * value_function: A callable taking `(observation, action)` and returning
    the value of the pair.
    * observation: The observation to maximize from.
    * actions: The ordered actions to maximize over.

    Returns:
    * The best action.

    Raises:
    * `RuntimeError` if there are no actions to choose from.
    """
    best_action, best_value = None, None
    for action in actions:
        value = total_order_key(value_function(observation, action))
        if best_value is None or value > best_value:
            best_action, best_value = action, value
    if best_value is None:
        raise RuntimeError('Could not determine best action for observation {!r}'\
                           .format(observation))
    return best_action



class Policy:
    """
    A decision rule mapping observations to actions, improved with a value
    function.
    """

    def act(self, observation: Hashable) -> Hashable:
        raise NotImplementedError


    def policy_improvement(self, value_function: Callable, observations: Iterable=None):
        raise NotImplementedError


    def action_probability(self, action: Hashable, observation: Hashable) -> float:
        raise NotImplementedError



class EpsilonGreedyPolicy(Policy):
    """
    A tabular policy that keeps the best known action for each observation.
    With probability `epsilon` a uniformly random action is explored instead.

    The initial best action for each observation is drawn at random.

    Args:
    * epsilon (float): Exploration rate in [0, 1).
    * observations: The `DiscreteDomain` of observations.
    * actions: The `DiscreteDomain` of actions.
    * rng: A `RandomSource` drawing numbers in [0, 1).

    Raises:
    * `InvalidEpsilon` if `epsilon` is outside [0, 1).
    """

    def __init__(self, epsilon: float, observations: DiscreteDomain,
                 actions: DiscreteDomain, rng: RandomSource):
        if not 0. <= epsilon < 1.:
            raise InvalidEpsilon('EpsilonGreedyPolicy requires an epsilon in '\
                                 '[0, 1). Received {}'.format(epsilon))
        self.epsilon = epsilon
        self.observations = observations
        self.actions = actions
        self.rng = rng
        self.mapping = [self._random_action() for _ in observations]


    def _random_action(self) -> Hashable:
        return self.actions[int(self.rng.random() * len(self.actions))]


    def greedy(self, observation: Hashable) -> Hashable:
        """
        The best known action from `observation`.

        Raises:
        * `UnknownObservation` if the observation is not in the domain.
        """
        try:
            return self.mapping[self.observations.index(observation)]
        except DomainError as err:
            raise UnknownObservation(str(err)) from None


    def act(self, observation: Hashable) -> Hashable:
        """
        Selects an action. Explores a uniformly random action with probability
        `epsilon`, otherwise exploits the best known action.

        Args:
        * observation: A member of the observation domain.

        Returns:
        * A member of the action domain.

        Raises:
        * `UnknownObservation` if the observation is not in the domain, whether
        the action is explored or exploited.
        """
        best = self.greedy(observation)
        if self.rng.random() < self.epsilon:
            return self._random_action()
        return best


    def policy_improvement(self, value_function: Callable[[Hashable, Hashable], float],
                           observations: Iterable[Hashable]=None):
        """
        Makes the policy greedy with respect to `value_function`.

        Args:
        * value_function: A callable taking `(observation, action)` and
        returning the value of the pair.
        * observations: The observations whose best action is recomputed.
        Defaults to the whole observation domain.
        """
        if observations is None:
            observations = self.observations
        for observation in observations:
            position = self.observations.index(observation)
            self.mapping[position] = argmax(value_function, observation, self.actions)


    def action_probability(self, action: Hashable, observation: Hashable) -> float:
        """
        Probability of selecting `action` from `observation`. Exploration mass
        is spread uniformly over all actions, the rest goes to the greedy one.
        """
        prob = self.epsilon / len(self.actions)
        if self.greedy(observation) == action:
            prob += 1. - self.epsilon
        return prob
