"""
Defines dummy environments to illustrate and diagnose reinforcement learning
algorithms. The environments have simple control policy solutions described
in their documentations.
"""

from .chain import DummyChain, DummyRover, Move
from .bandit import DummyBandit
from .cliff import DummyCliff, Walk
from .empty import DummyEmpty
