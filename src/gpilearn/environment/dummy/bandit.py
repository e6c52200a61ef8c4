from ...agent.random import NumpyRandom
from ...helpers.spaces import DiscreteDomain
from ..environment import Environment



class DummyBandit(Environment):
    """
    A multi-armed bandit played once per episode. There is a single
    observation, 0. Pulling arm `i` (0-indexed) pays `(i + 1) * u` where `u` is
    uniform in [0, 2), so the expected payouts are 1, 2, 3, ...

    Args:
    * narms (int): Number of arms. Default 3.
    * rng: A `RandomSource` or `int` seed for the payouts.
    """

    def __init__(self, narms: int=3, rng=None):
        super().__init__(DiscreteDomain((0,), 'game'),
                         DiscreteDomain(range(narms), 'arms'))
        self.rng = rng if hasattr(rng, 'random') else NumpyRandom(rng)
        self.played = False


    def reset(self):
        self.played = False


    def get_observation(self, agent):
        if self.played:
            return None
        return 0


    def receive_action(self, agent, action) -> float:
        self.played = True
        return (action + 1) * self.rng.random() * 2.


    def final_observation(self, agent):
        return 0
