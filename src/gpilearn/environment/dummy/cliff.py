from enum import Enum
from itertools import product

from ...helpers.spaces import DiscreteDomain
from ..environment import FunctionalEnvironment



class Walk(Enum):
    UP = (0, 1)
    DOWN = (0, -1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)



class DummyCliff(FunctionalEnvironment):
    """
    Cliff walking on a `WIDTH` x `HEIGHT` grid. The walker starts at (0, 0) and
    the goal is (WIDTH-1, 0). The rest of the bottom row is a cliff that ends
    the episode. Reaching the goal pays 10, falling off the cliff -100, every
    other step -1.
    """

    WIDTH = 12
    HEIGHT = 4


    @classmethod
    def goal_func(cls, state) -> bool:
        x, y = state
        return y == 0 and x != 0


    @classmethod
    def transition_func(cls, state, action: Walk):
        (x, y), (dx, dy) = state, action.value
        return (min(max(x + dx, 0), cls.WIDTH - 1), min(max(y + dy, 0), cls.HEIGHT - 1))


    @classmethod
    def reward_func(cls, state, action: Walk, nstate) -> float:
        x, y = nstate
        if y == 0 and x == cls.WIDTH - 1:
            return 10.
        if y == 0 and x != 0:
            return -100.
        return -1.


    def __init__(self, maxsteps=None):
        cells = [(x, y) for y, x in product(range(self.HEIGHT), range(self.WIDTH))]
        maxsteps = 10 * len(cells) if maxsteps is None else maxsteps
        super().__init__(reward=self.reward_func,
                         transition=self.transition_func,
                         observations=DiscreteDomain(cells, 'cells'),
                         actions=DiscreteDomain(Walk, 'walks'),
                         goal=self.goal_func,
                         initial=(0, 0),
                         maxsteps=maxsteps)
