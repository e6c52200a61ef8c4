from enum import Enum

from ...helpers.spaces import DiscreteDomain
from ..environment import FunctionalEnvironment



class Move(Enum):
    LEFT = -1
    RIGHT = 1



class DummyChain(FunctionalEnvironment):
    """
    A line of `NSTATES` cells. Episodes start at cell `START` and end at either
    edge. Stepping onto the left edge pays `LEFT_REWARD`, onto the right edge
    `RIGHT_REWARD`, anywhere else nothing.

    The optimal policy moves right from every cell.
    """

    NSTATES = 3
    START = 1
    LEFT_REWARD = 1.
    RIGHT_REWARD = 10.


    @classmethod
    def goal_func(cls, state: int) -> bool:
        return state in (0, cls.NSTATES - 1)


    @classmethod
    def transition_func(cls, state: int, action: Move) -> int:
        return min(max(state + action.value, 0), cls.NSTATES - 1)


    @classmethod
    def reward_func(cls, state: int, action: Move, nstate: int) -> float:
        if nstate == 0:
            return cls.LEFT_REWARD
        if nstate == cls.NSTATES - 1:
            return cls.RIGHT_REWARD
        return 0.


    def __init__(self, maxsteps=None):
        maxsteps = 10 * self.NSTATES if maxsteps is None else maxsteps
        super().__init__(reward=self.reward_func,
                         transition=self.transition_func,
                         observations=DiscreteDomain(range(self.NSTATES), 'cells'),
                         actions=DiscreteDomain(Move, 'moves'),
                         goal=self.goal_func,
                         initial=self.START,
                         maxsteps=maxsteps)



class DummyRover(DummyChain):
    """
    A rover on a line of seven cells, starting in the middle. The left edge
    pays 1, the right edge pays 10.
    """

    NSTATES = 7
    START = 3
