"""
Defines the `Environment` interface and implementations.

All `Environment` classes have the following API:

* Methods:
  * `get_observation(agent)` which returns the agent's observation of the
  current state, or None when the episode is over.
  * `receive_action(agent, action)` which applies an action and returns the
  reward.
  * `reset()` which returns the environment to an initial state.
  * `start_episode()` which prepares and returns the environment to run the
  next episode on.
  * `final_observation(agent)` which returns the terminal observation.

* Attributes:
  * `observations`, `actions`: The `DiscreteDomain`s of the environment.
  * `observation_space`, `action_space`: The equivalent `gymnasium` spaces.
"""

from .environment import Environment, FunctionalEnvironment
from .gym import GymEnvironment
from . import dummy
