"""
Defines the `Agent` interface that estimators train, and the
`EpsilonGreedyAgent` which acts through an `EpsilonGreedyPolicy`.
"""

from numbers import Integral
from typing import Callable, Hashable, Iterable

from ..helpers.spaces import DiscreteDomain
from .policy import EpsilonGreedyPolicy
from .random import RandomSource, NumpyRandom



class Agent:
    """
    An agent selects actions from observations and improves its behaviour
    from value functions handed to it by an estimator.

    Sub-classes must implement:
    * `act(observation) -> action`
    * `policy_improvement(value_function, observations=None)`
    * `action_probability(action, observation) -> float`, required only by
    estimators that average over the agent's behaviour (Expected SARSA).
    """

    def __str__(self):
        return self.__class__.__name__


    def act(self, observation: Hashable) -> Hashable:
        raise NotImplementedError


    def policy_improvement(self, value_function: Callable[[Hashable, Hashable], float],
                           observations: Iterable[Hashable]=None):
        raise NotImplementedError


    def action_probability(self, action: Hashable, observation: Hashable) -> float:
        raise NotImplementedError



class EpsilonGreedyAgent(Agent):
    """
    An agent whose behaviour is an `EpsilonGreedyPolicy`.

    Args:
    * epsilon (float): Exploration rate in [0, 1).
    * observations: The `DiscreteDomain` of observations.
    * actions: The `DiscreteDomain` of actions.
    * rng: A `RandomSource`, or an integer seed for a `NumpyRandom`. Default is
    None (unseeded).

    Attributes:
    * policy: The `EpsilonGreedyPolicy` owned by the agent.
    """

    def __init__(self, epsilon: float, observations: DiscreteDomain,
                 actions: DiscreteDomain, rng=None):
        if rng is None or isinstance(rng, Integral):
            rng = NumpyRandom(rng)
        self.policy = EpsilonGreedyPolicy(epsilon, observations, actions, rng)


    def act(self, observation):
        return self.policy.act(observation)


    def recommend(self, observation):
        """
        The greedy action from `observation`, without exploration.
        """
        return self.policy.greedy(observation)


    def policy_improvement(self, value_function, observations=None):
        self.policy.policy_improvement(value_function, observations)


    def action_probability(self, action, observation):
        return self.policy.action_probability(action, observation)
