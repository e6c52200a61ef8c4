"""
gpilearn: tabular reinforcement learning by generalized policy iteration.

An estimator from `gpilearn.algorithm` runs episodes of an `Agent` on an
`Environment`, estimates action values in a `Tabular` store, and improves the
agent's policy towards optimality:

    from gpilearn import EpsilonGreedyAgent, QLearning
    from gpilearn.environment.dummy import DummyRover

    env = DummyRover()
    agent = EpsilonGreedyAgent(0.05, env.observations, env.actions, rng=0)
    QLearning(alpha=0.1, discount=1., episode_limit=1000).policy_search(env, agent)
"""

from .exceptions import GPILearnError, ConfigurationError, InvalidEpsilon,\
                        DomainError, UnknownObservation, TrajectoryError
from .helpers import DiscreteDomain, discounted_return
from .agent import Agent, EpsilonGreedyAgent, EpsilonGreedyPolicy, RandomSource,\
                   NumpyRandom
from .approximator import Tabular
from .environment import Environment, FunctionalEnvironment, GymEnvironment
from .algorithm import FirstVisitMonteCarlo, EveryVisitMonteCarlo,\
                       IncrementalMonteCarlo, ConstantAlphaMonteCarlo,\
                       QLearning, SARSA, ExpectedSARSA, EstimatorConfig
