"""
Defines the entries of a trajectory and the episode generator.

A trajectory is a list of zero or more `Step` entries followed by exactly one
`Final` entry:

    [Step(o0, a0, r0), Step(o1, a1, r1), ..., Final(oT)]

`r0` is the reward for taking `a0` at `o0`. No action is taken from `oT`.
"""

from collections import namedtuple
from typing import List, Tuple

from ..exceptions import TrajectoryError


Step = namedtuple('Step', ('observation', 'action', 'reward'))
Final = namedtuple('Final', ('observation',))



def generate_trajectory(environment: 'Environment', agent: 'Agent') \
    -> Tuple['Environment', List]:
    """
    Runs one episode of `agent` on `environment` until the environment stops
    yielding observations.

    Args:
    * environment: The environment. `start_episode()` is called first, and the
    environment it returns is the one the episode runs on.
    * agent: The agent selecting actions.

    Returns:
    * A tuple of the environment the episode ran on and the trajectory. The
    trajectory always contains at least the `Final` entry.
    """
    environment = environment.start_episode()
    trajectory = []
    observation = environment.get_observation(agent)
    while observation is not None:
        action = agent.act(observation)
        reward = environment.receive_action(agent, action)
        trajectory.append(Step(observation, action, reward))
        observation = environment.get_observation(agent)
    trajectory.append(Final(environment.final_observation(agent)))
    return environment, trajectory



def steps_of(trajectory: List) -> List[Step]:
    """
    The `Step` entries of a trajectory, without the terminal entry.

    Raises:
    * `TrajectoryError` if the trajectory is not a run of `Step`s closed by a
    single `Final`.
    """
    if not trajectory or not isinstance(trajectory[-1], Final):
        raise TrajectoryError('A trajectory must end with exactly one Final entry.')
    steps = trajectory[:-1]
    for entry in steps:
        if not isinstance(entry, Step):
            raise TrajectoryError('Only the last trajectory entry may be Final, '\
                                  'found {!r}'.format(entry))
    return steps



def rewards_of(trajectory: List) -> List[float]:
    """
    The rewards of the `Step` entries of a trajectory, in order. The terminal
    entry has no reward and contributes nothing.
    """
    return [entry.reward for entry in trajectory if isinstance(entry, Step)]



def pair_of(entry) -> Tuple:
    """
    The (observation, action) pair of a trajectory entry.

    Raises:
    * `TrajectoryError` for `Final` entries, which carry no action.
    """
    if not isinstance(entry, Step):
        raise TrajectoryError('The terminal entry of an episode has no action: '\
                              '{!r}'.format(entry))
    return entry.observation, entry.action
