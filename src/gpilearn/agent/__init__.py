"""
Defines the `Agent` class and sub-classes. Agents select actions from
observations under some action-selection policy, and are improved by the
estimators in `gpilearn.algorithm`.

Defines the `Policy` classes agents act through, and the `RandomSource` used
for exploration.
"""

from .agent import Agent, EpsilonGreedyAgent
from .policy import Policy, EpsilonGreedyPolicy, argmax
from .random import RandomSource, NumpyRandom
