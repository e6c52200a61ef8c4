from ...helpers.spaces import DiscreteDomain
from ..environment import Environment



class DummyEmpty(Environment):
    """
    An environment whose episodes end before the first action. Every
    trajectory consists of the terminal observation only.
    """

    def __init__(self):
        super().__init__(DiscreteDomain((0,), 'void'), DiscreteDomain((0, 1), 'noop'))


    def reset(self):
        pass


    def get_observation(self, agent):
        return None


    def receive_action(self, agent, action) -> float:
        raise RuntimeError('DummyEmpty never accepts actions.')


    def final_observation(self, agent):
        return 0
