"""
Defines the pieces shared by every estimator: the `EstimatorConfig`, the
`TrainingState` an estimator owns during a search, the episode loop with its
convergence check, and the `PolicyEstimator` base class.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

import numpy as np

from ..approximator import Tabular
from ..exceptions import ConfigurationError
from ..helpers.spaces import DiscreteDomain
from .convergence import ConvergenceWindow, EPSILON


logger = logging.getLogger(__name__)



@dataclass(frozen=True)
class EstimatorConfig:
    """
    Parameters of a single policy search.

    Args:
    * discount: The discount level for future rewards. Between 0 and 1.
    * episode_limit: Number of episodes at most to learn over.
    * alpha: Step size in (0, 1] for algorithms with a constant step size.
    None for algorithms that derive it from visit counts.
    * steps: Number of rewards accumulated before bootstrapping (temporal
    difference lookahead). At least 1.
    * window: Number of recent episodes checked for convergence.
    * tolerance: Largest total squared value change of an episode that still
    counts as converged.

    Raises:
    * `ConfigurationError` for out of range values.
    """

    discount: float
    episode_limit: int
    alpha: Optional[float] = None
    steps: int = 1
    window: int = 5
    tolerance: float = EPSILON

    def __post_init__(self):
        if not 0. <= self.discount <= 1.:
            raise ConfigurationError('discount must be in [0, 1]. Received {}'\
                                     .format(self.discount))
        if self.episode_limit < 0:
            raise ConfigurationError('episode_limit must be non-negative. '\
                                     'Received {}'.format(self.episode_limit))
        if self.alpha is not None and not 0. < self.alpha <= 1.:
            raise ConfigurationError('alpha must be in (0, 1]. Received {}'\
                                     .format(self.alpha))
        if self.steps < 1:
            raise ConfigurationError('steps must be at least 1. Received {}'\
                                     .format(self.steps))
        if self.window < 1:
            raise ConfigurationError('window must be at least 1. Received {}'\
                                     .format(self.window))



class TrainingState:
    """
    The mutable state of one policy search, owned by the estimator and passed
    to the update rules that need it.

    Attributes:
    * environment: The environment the current episode runs on.
    * agent: The agent being trained.
    * table: The `Tabular` action-value estimates and visit counts.
    * returns: Sum of returns observed for each pair (for averaging updates).
    * episode: Number of episodes started so far.
    """

    def __init__(self, environment: 'Environment', agent: 'Agent', table: Tabular):
        self.environment = environment
        self.agent = agent
        self.table = table
        self.returns = np.zeros(len(table))
        self.episode = 0



def run_episode_loop(config: EstimatorConfig, episode: Callable[[], float]) -> int:
    """
    Calls `episode` until `config.episode_limit` episodes have run, or the
    total squared value change of the last `config.window` episodes was at
    most `config.tolerance` for each of them.

    Args:
    * config: The estimator configuration.
    * episode: A function running one episode and returning its total squared
    value change.

    Returns:
    * The number of episodes run.
    """
    window = ConvergenceWindow(config.window, config.tolerance)
    n = 0
    while n < config.episode_limit and not window.converged:
        n += 1
        variation = episode()
        window.append(variation)
        logger.debug('Episode %d: total squared value change %g', n, variation)
    return n



def format_table(header: str, table: np.ndarray, observations: DiscreteDomain,
                 actions: DiscreteDomain) -> str:
    """
    Renders a `(|observations|, |actions|)` table one observation per line:

        header
        o0 [a0; v00] [a1; v01] ...
    """
    lines = [header]
    for observation, row in zip(observations, table):
        cells = ' '.join('[{!r}; {}]'.format(a, v) for a, v in zip(actions, row))
        lines.append('{!r} {}'.format(observation, cells))
    return '\n'.join(lines)



class PolicyEstimator:
    """
    Base class of estimators. An estimator is configured once, and its single
    `policy_search()` call trains an agent on an environment.

    Sub-classes implement `episode(state)` which runs one episode, updates
    `state.table` and the agent, and returns the total squared value change.

    Args:
    * config: An `EstimatorConfig`.

    Attributes:
    * state: The `TrainingState` of the search, available after it ran.
    * episodes: Number of episodes the search ran.
    """

    def __init__(self, config: EstimatorConfig):
        self.config = config
        self.state = None
        self.episodes = None


    def __str__(self):
        return self.__class__.__name__


    @property
    def table(self) -> Tabular:
        return None if self.state is None else self.state.table


    def episode(self, state: TrainingState) -> float:
        raise NotImplementedError


    def policy_search(self, environment: 'Environment', agent: 'Agent'):
        """
        Trains `agent` on `environment` until the episode limit or convergence.
        The learned behaviour is held by the agent.

        Args:
        * environment: An `Environment` with discrete observation and action
        domains.
        * agent: The `Agent` to improve.

        Raises:
        * `RuntimeError` if the estimator was already used.
        """
        if self.state is not None:
            raise RuntimeError('{} has already run a policy search.'.format(self))
        table = Tabular(environment.observations, environment.actions)
        self.state = state = TrainingState(environment, agent, table)
        logger.info('%s: searching policy of %s on %s (%s)', self, agent,\
                    environment, self.config)

        def episode():
            state.episode += 1
            return self.episode(state)

        self.episodes = run_episode_loop(self.config, episode)
        self.report()


    def report(self):
        """
        Logs the learned tables (DEBUG) and the outcome of the search (INFO).
        """
        table = self.state.table
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(format_table('Observation Visit Count', table.table(True),\
                         table.observations, table.actions))
            logger.debug(format_table('Action Value Function', table.table(),\
                         table.observations, table.actions))
        if self.episodes < self.config.episode_limit:
            logger.info('%s: converged in %d episodes.', self, self.episodes)
        else:
            logger.info('%s: stopped at the episode limit (%d).', self, self.episodes)
