"""
Implements the temporal difference family of estimators. Values are updated
while the episode runs, bootstrapping from the estimate of the next
(observation, action) pair:

    `Q'(s, a) = Q(s, a) + alpha * (r + d * B(s', a') - Q(s, a))`

The bootstrap `B` distinguishes the algorithms:

* Q-learning (off-policy): `max_a' Q(s', a')`
* SARSA (on-policy): `Q(s', a')` for the action actually taken.
* Expected SARSA: `sum_a' pi(a'|s') Q(s', a')` under the agent's policy.

No trajectory is kept. A window of the last `steps` transitions is enough.
"""

import logging
from collections import deque
from typing import Callable, Optional

from ..exceptions import ConfigurationError
from .estimator import EstimatorConfig, PolicyEstimator, TrainingState
from .trajectory import Step, pair_of


logger = logging.getLogger(__name__)

# bootstrap(state, next_step) -> estimate of the value of next_step
Bootstrap = Callable[[TrainingState, Optional[Step]], float]



def q_learning(state: TrainingState, next_step: Optional[Step]) -> float:
    """
    Value of the best action from the next observation. 0 at termination.
    """
    if next_step is None:
        return 0.
    return state.table.max(next_step.observation)



def sarsa(state: TrainingState, next_step: Optional[Step]) -> float:
    """
    Value of the next (observation, action) pair. 0 at termination.
    """
    if next_step is None:
        return 0.
    return state.table[pair_of(next_step)]



def expected_sarsa(state: TrainingState, next_step: Optional[Step]) -> float:
    """
    Value of the next observation averaged over the agent's action
    probabilities. 0 at termination.
    """
    if next_step is None:
        return 0.
    observation = next_step.observation
    return sum(state.agent.action_probability(action, observation) \
               * state.table[observation, action] for action in state.table.actions)



def temporal_difference_update(state: TrainingState, config: EstimatorConfig,
                               bootstrap: Bootstrap, past: Step, pending: deque,
                               next_step: Optional[Step]) -> float:
    """
    Updates the value of the pair in `past` and makes the agent greedy for its
    observation.

    Args:
    * state: The training state.
    * config: The estimator configuration.
    * bootstrap: The algorithm-specific estimate of `next_step`.
    * past: The step whose value is updated.
    * pending: The steps taken after `past`, before `next_step`. Their rewards
    are discounted into the target.
    * next_step: The step to bootstrap from, or None once the episode is over.

    Returns:
    * The squared value change.
    """
    observation, action = pair_of(past)
    target = past.reward
    for k, later in enumerate(pending, 1):
        target += config.discount ** k * later.reward
    target += config.discount ** (len(pending) + 1) * bootstrap(state, next_step)

    table = state.table
    value = table[observation, action]
    table.visit(observation, action)
    variation = table.update(observation, action, value + config.alpha * (target - value))
    state.agent.policy_improvement(table.view(), (observation,))
    return variation



def temporal_difference_episode(state: TrainingState, config: EstimatorConfig,
                                bootstrap: Bootstrap) -> float:
    """
    Runs one episode. Each step waits in a window until `config.steps` more
    steps were taken, then its value is updated bootstrapping from the newest
    step. When the episode ends, the steps left in the window are updated
    with a bootstrap of 0.

    Args:
    * state: The training state. `state.environment` is replaced by the
    environment the episode ran on.
    * config: The estimator configuration.
    * bootstrap: The algorithm-specific estimate of the next step.

    Returns:
    * The total squared value change of the episode.
    """
    environment = state.environment = state.environment.start_episode()
    agent = state.agent
    window = deque()
    variation = 0.

    observation = environment.get_observation(agent)
    while observation is not None:
        action = agent.act(observation)
        reward = environment.receive_action(agent, action)
        step = Step(observation, action, reward)
        if len(window) >= config.steps:
            past = window.popleft()
            variation += temporal_difference_update(state, config, bootstrap,\
                                                    past, window, step)
        window.append(step)
        observation = environment.get_observation(agent)

    logger.debug('Episode %d ended at %r', state.episode,\
                 environment.final_observation(agent))
    while window:
        past = window.popleft()
        variation += temporal_difference_update(state, config, bootstrap,\
                                                past, window, None)
    return variation



class TemporalDifference(PolicyEstimator):
    """
    Base class of temporal difference estimators. Sub-classes set `bootstrap`
    to their estimate of the next step's value.

    Args:
    * alpha: Step size in (0, 1].
    * discount: The discount level for future rewards. Between 0 and 1.
    * episode_limit: Number of episodes at most to learn over.
    * steps: Number of rewards accumulated before bootstrapping. Default 1.
    """

    bootstrap = None

    def __init__(self, alpha: float, discount: float, episode_limit: int, steps: int=1):
        if alpha is None:
            raise ConfigurationError('{} requires a step size alpha.'.format(self))
        super().__init__(EstimatorConfig(discount=discount, episode_limit=episode_limit,
                                         alpha=alpha, steps=steps))


    def episode(self, state):
        return temporal_difference_episode(state, self.config, self.bootstrap)



class QLearning(TemporalDifference):
    """
    Q-learning: Off-policy temporal difference learning. Bootstraps from the
    most valuable action of the next observation, whatever the agent does.
    """

    bootstrap = staticmethod(q_learning)



class SARSA(TemporalDifference):
    """
    SARSA: On-policy temporal difference learning. Bootstraps from the action
    the agent actually took next, so exploration is reflected in the values.
    """

    bootstrap = staticmethod(sarsa)



class ExpectedSARSA(TemporalDifference):
    """
    Expected SARSA: Bootstraps from the expected value of the next observation
    under the agent's policy. The agent must implement `action_probability`.
    """

    bootstrap = staticmethod(expected_sarsa)
