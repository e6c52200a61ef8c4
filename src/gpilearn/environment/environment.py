"""
Defines the `Environment` interface estimators interact with, and
`FunctionalEnvironment` which assembles an environment from reward,
transition and goal functions.
"""

from typing import Any, Callable, Hashable, Optional

import numpy as np
from gymnasium.spaces import Discrete

from ..helpers.spaces import DiscreteDomain



class Environment:
    """
    The interface between the world and an agent. The environment has an
    internal state the agent does not see; the agent acts over observations of
    it drawn from the closed `observations` domain.

    Sub-classes must implement `get_observation`, `receive_action`, `reset` and
    `final_observation`. Environments that are rebuilt for every episode
    instead of reset in place override `start_episode` to return the new
    instance.

    Args:
    * observations: The `DiscreteDomain` of observations the environment emits.
    * actions: The `DiscreteDomain` of actions the environment accepts.
    """

    def __init__(self, observations: DiscreteDomain, actions: DiscreteDomain):
        self.observations = observations
        self.actions = actions


    def __str__(self):
        return self.__class__.__name__


    @property
    def observation_space(self) -> Discrete:
        return self.observations.to_space()


    @property
    def action_space(self) -> Discrete:
        return self.actions.to_space()


    def get_observation(self, agent) -> Optional[Hashable]:
        """
        Observation of the environment from the point of view of `agent`, or
        None when the episode is over.
        """
        raise NotImplementedError


    def receive_action(self, agent, action: Hashable) -> float:
        """
        Applies `action` taken by `agent` and returns the reward.
        """
        raise NotImplementedError


    def reset(self):
        """
        Returns the environment to an initial state.
        """
        raise NotImplementedError


    def final_observation(self, agent) -> Hashable:
        """
        Observation of the terminal state reached at the end of an episode.
        """
        raise NotImplementedError


    def start_episode(self) -> 'Environment':
        """
        Prepares an episode. Resets in place and returns the same instance.

        Returns:
        * The environment to run the episode on.
        """
        self.reset()
        return self



class FunctionalEnvironment(Environment):
    """
    FunctionalEnvironment encapsulates transition, reward, and goal functions
    into a cohesive object. The environment state is persistent - it remembers
    its last state from the previous call to `receive_action()`. The state is
    also the observation.

    Args:
    * reward: A function that takes starting state, action, next state and
    returns a float representing the reward.
    * transition: A function that takes the current state and action and
    returns the next state.
    * observations: The `DiscreteDomain` of states.
    * actions: The `DiscreteDomain` of actions.
    * goal: A function that takes a state and returns True if it is terminal.
    * initial: The initial state, or a function returning one. Called on each
    `reset()`.
    * maxsteps: Number of actions at most before the episode ends. Default
    is unbounded.
    """

    def __init__(self, reward: Callable[[Any, Any, Any], float],
                 transition: Callable[[Any, Any], Any],
                 observations: DiscreteDomain, actions: DiscreteDomain,
                 goal: Callable[[Any], bool], initial: Any,
                 maxsteps: int=np.inf):
        super().__init__(observations, actions)
        self.reward = reward
        self.transition = transition
        self.goal = goal
        self.initial = initial
        self.maxsteps = maxsteps
        self.reset()


    def reset(self):
        """
        Return the environment to its initial state.

        Returns:
        * The new initial state of the environment.
        """
        self.t = 0
        self.state = self.initial() if callable(self.initial) else self.initial
        return self.state


    def get_observation(self, agent):
        if self.t >= self.maxsteps or self.goal(self.state):
            return None
        return self.state


    def receive_action(self, agent, action) -> float:
        self.t += 1
        nstate = self.transition(self.state, action)
        reward = self.reward(self.state, action, nstate)
        self.state = nstate
        return float(reward)


    def final_observation(self, agent):
        return self.state
