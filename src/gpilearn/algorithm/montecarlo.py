"""
Implements the Monte Carlo family of estimators. Monte Carlo methods wait
until the end of an episode and update values with the observed returns,
without bootstrapping:

* First-visit: averages returns of the first visit to each pair per episode.
* Every-visit: averages returns of every visit.
* Incremental: running mean `V += (G - V) / N`.
* Constant-alpha: `V += alpha * (G - V)`.

Each variant is an update rule plugged into `monte_carlo_episode`.
"""

import logging
from typing import Callable, Set

from ..exceptions import ConfigurationError
from ..helpers.returns import discounted_return
from .estimator import EstimatorConfig, PolicyEstimator, TrainingState, format_table
from .trajectory import Step, generate_trajectory, pair_of, rewards_of, steps_of


logger = logging.getLogger(__name__)

# update(state, step, return, visited, config) -> squared value change
UpdateRule = Callable[[TrainingState, Step, float, Set[int], EstimatorConfig], float]



def first_visit(state: TrainingState, step: Step, ret: float, visited: Set[int],
                config: EstimatorConfig) -> float:
    """
    Averages the return into the pair's value, only if the pair was not yet
    visited this episode.
    """
    observation, action = pair_of(step)
    i = state.table.index(observation, action)
    if i in visited:
        return 0.
    visited.add(i)
    return every_visit(state, step, ret, visited, config)



def every_visit(state: TrainingState, step: Step, ret: float, visited: Set[int],
                config: EstimatorConfig) -> float:
    """
    Averages the return into the pair's value: `V = sum(G) / N`.
    """
    observation, action = pair_of(step)
    i = state.table.index(observation, action)
    n = state.table.visit(observation, action)
    state.returns[i] += ret
    return state.table.update(observation, action, state.returns[i] / n)



def incremental(state: TrainingState, step: Step, ret: float, visited: Set[int],
                config: EstimatorConfig) -> float:
    """
    Moves the pair's value towards the return by `1/N`: `V += (G - V) / N`.
    """
    observation, action = pair_of(step)
    n = state.table.visit(observation, action)
    value = state.table[observation, action]
    return state.table.update(observation, action, value + (ret - value) / n)



def constant_alpha(state: TrainingState, step: Step, ret: float, visited: Set[int],
                   config: EstimatorConfig) -> float:
    """
    Moves the pair's value towards the return by a constant step size:
    `V += alpha * (G - V)`. Visits are still counted.
    """
    observation, action = pair_of(step)
    state.table.visit(observation, action)
    value = state.table[observation, action]
    return state.table.update(observation, action, value + config.alpha * (ret - value))



def monte_carlo_episode(state: TrainingState, config: EstimatorConfig,
                        update: UpdateRule) -> float:
    """
    Runs one episode, then updates values from the returns of each step in
    order and makes the agent greedy with respect to the new values.

    Args:
    * state: The training state. `state.environment` is replaced by the
    environment the episode ran on.
    * config: The estimator configuration.
    * update: The update rule applied to each (step, return).

    Returns:
    * The total squared value change of the episode.
    """
    state.environment, trajectory = generate_trajectory(state.environment, state.agent)
    steps = steps_of(trajectory)
    returns = discounted_return(rewards_of(steps), config.discount)
    visited = set()
    variation = 0.
    for step, ret in zip(steps, returns):
        variation += update(state, step, float(ret), visited, config)
    state.agent.policy_improvement(state.table.view())
    return variation



class MonteCarlo(PolicyEstimator):
    """
    Base class of Monte Carlo estimators. Sub-classes set `update` to their
    update rule.
    """

    update = None


    def episode(self, state):
        return monte_carlo_episode(state, self.config, self.update)


    def report(self):
        if logger.isEnabledFor(logging.DEBUG):
            table = self.state.table
            returns = self.state.returns.reshape(len(table.observations), len(table.actions))
            logger.debug(format_table('Returns', returns, table.observations,\
                         table.actions))
        super().report()



class FirstVisitMonteCarlo(MonteCarlo):
    """
    First-visit Monte Carlo. Only the first occurrence of each
    (observation, action) pair in an episode updates its value.

    Args:
    * discount: The discount level for future rewards. Between 0 and 1.
    * episode_limit: Number of episodes at most to learn over.
    """

    update = staticmethod(first_visit)

    def __init__(self, discount: float, episode_limit: int):
        super().__init__(EstimatorConfig(discount=discount, episode_limit=episode_limit))



class EveryVisitMonteCarlo(MonteCarlo):
    """
    Every-visit Monte Carlo. Every occurrence of a pair updates its value.

    Args:
    * discount: The discount level for future rewards. Between 0 and 1.
    * episode_limit: Number of episodes at most to learn over.
    """

    update = staticmethod(every_visit)

    def __init__(self, discount: float, episode_limit: int):
        super().__init__(EstimatorConfig(discount=discount, episode_limit=episode_limit))



class IncrementalMonteCarlo(MonteCarlo):
    """
    Incremental Monte Carlo. Keeps a running mean of returns with a step size
    of `1/N` derived from the visit count.

    Args:
    * discount: The discount level for future rewards. Between 0 and 1.
    * episode_limit: Number of episodes at most to learn over.
    """

    update = staticmethod(incremental)

    def __init__(self, discount: float, episode_limit: int):
        super().__init__(EstimatorConfig(discount=discount, episode_limit=episode_limit))



class ConstantAlphaMonteCarlo(MonteCarlo):
    """
    Constant-alpha Monte Carlo. Recent returns weigh more than old ones, which
    suits non-stationary environments.

    Args:
    * alpha: Step size in (0, 1].
    * discount: The discount level for future rewards. Between 0 and 1.
    * episode_limit: Number of episodes at most to learn over.
    """

    update = staticmethod(constant_alpha)

    def __init__(self, alpha: float, discount: float, episode_limit: int):
        if alpha is None:
            raise ConfigurationError('{} requires a step size alpha.'.format(self))
        super().__init__(EstimatorConfig(discount=discount, episode_limit=episode_limit,
                                         alpha=alpha))
