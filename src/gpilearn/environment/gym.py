"""
Adapts `gymnasium` environments with discrete observation and action spaces
to the `Environment` interface.
"""

from typing import Union

import gymnasium

from ..helpers.spaces import DiscreteDomain, to_element, to_sample
from .environment import Environment



class GymEnvironment(Environment):
    """
    Wraps a `gymnasium.Env`. Observations and actions are converted to
    hashable domain elements: ints for `Discrete` spaces and flat tuples of
    ints otherwise. An episode ends when the wrapped environment reports
    `terminated` or `truncated`.

    Args:
    * env: The environment to wrap. Must have discrete spaces.
    * seed: Seed passed to the first `env.reset()`. Default is None.

    Attributes:
    * info: The info dictionary of the last `reset()` or `step()`.
    """

    def __init__(self, env: gymnasium.Env, seed: Union[int, None]=None):
        observations = DiscreteDomain.from_space(env.observation_space, 'observations')
        actions = DiscreteDomain.from_space(env.action_space, 'actions')
        super().__init__(observations, actions)
        self.env = env
        self.seed = seed
        self.done = True
        self.state = None
        self.info = {}


    @property
    def observation_space(self):
        return self.env.observation_space


    @property
    def action_space(self):
        return self.env.action_space


    def reset(self):
        sample, self.info = self.env.reset(seed=self.seed)
        # Seed only once so that episodes differ.
        self.seed = None
        self.state = to_element(self.env.observation_space, sample)
        self.done = False
        return self.state


    def get_observation(self, agent):
        return None if self.done else self.state


    def receive_action(self, agent, action) -> float:
        sample = to_sample(self.env.action_space, action)
        nsample, reward, terminated, truncated, self.info = self.env.step(sample)
        self.state = to_element(self.env.observation_space, nsample)
        self.done = bool(terminated or truncated)
        return float(reward)


    def final_observation(self, agent):
        return self.state
