"""
Defines estimators that learn action values from interaction and improve an
agent's policy with them.

* Monte Carlo: `FirstVisitMonteCarlo`, `EveryVisitMonteCarlo`,
`IncrementalMonteCarlo`, `ConstantAlphaMonteCarlo`.
* Temporal difference: `QLearning`, `SARSA`, `ExpectedSARSA`.

Every estimator has a single entry point, `policy_search(environment, agent)`,
and can be used once.
"""

from .trajectory import Step, Final, generate_trajectory, steps_of, rewards_of
from .convergence import ConvergenceWindow
from .estimator import EstimatorConfig, PolicyEstimator, TrainingState, run_episode_loop
from .montecarlo import MonteCarlo, FirstVisitMonteCarlo, EveryVisitMonteCarlo,\
                        IncrementalMonteCarlo, ConstantAlphaMonteCarlo
from .temporaldifference import TemporalDifference, QLearning, SARSA, ExpectedSARSA
