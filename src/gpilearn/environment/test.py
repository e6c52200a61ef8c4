import unittest
from numbers import Number

import numpy as np
import gymnasium
from gymnasium.spaces import Discrete, MultiDiscrete

from ..agent.test import ScriptedRandom
from ..helpers.spaces import DiscreteDomain
from . import dummy, Environment, FunctionalEnvironment, GymEnvironment



class Corridor(gymnasium.Env):
    """
    Four cells in a row. Action 1 moves right, 0 stays. Reaching the last cell
    pays 1 and terminates. Episodes are truncated after `limit` steps.
    """

    def __init__(self, limit=10):
        self.observation_space = Discrete(4)
        self.action_space = Discrete(2)
        self.limit = limit
        self.position = 0
        self.t = 0


    def reset(self, *, seed=None, options=None):
        super().reset(seed=seed)
        self.position = 0
        self.t = 0
        return self.position, {'reset': True}


    def step(self, action):
        self.t += 1
        self.position = min(self.position + int(action), 3)
        terminated = self.position == 3
        truncated = self.t >= self.limit
        return self.position, float(terminated), terminated, truncated, {}



class Grid(gymnasium.Env):
    """
    A 3x2 grid observed as `MultiDiscrete` coordinates. Action (dx, dy) moves
    by at most 1 in each direction and the episode ends at (2, 1).
    """

    def __init__(self):
        self.observation_space = MultiDiscrete([3, 2])
        self.action_space = MultiDiscrete([2, 2])
        self.position = np.zeros(2, dtype=np.int64)


    def reset(self, *, seed=None, options=None):
        super().reset(seed=seed)
        self.position = np.zeros(2, dtype=np.int64)
        return self.position.copy(), {}


    def step(self, action):
        self.position = np.minimum(self.position + action, [2, 1])
        terminated = bool(self.position[0] == 2 and self.position[1] == 1)
        return self.position.copy(), -1., terminated, False, {}



class TestFunctionalEnvironment(unittest.TestCase):


    def setUp(self):
        self.env = FunctionalEnvironment(reward=lambda s, a, ns: ns - s,
                                         transition=lambda s, a: (s + a) % 5,
                                         observations=DiscreteDomain(range(5)),
                                         actions=DiscreteDomain((0, 1)),
                                         goal=lambda s: False,
                                         initial=lambda: 2,
                                         maxsteps=4)


    def test_transitions(self):
        self.assertEqual(self.env.get_observation(None), 2)
        reward = self.env.receive_action(None, 1)
        self.assertIsInstance(reward, float)
        self.assertEqual(reward, 1.)
        self.assertEqual(self.env.get_observation(None), 3)
        self.assertEqual(self.env.t, 1)


    def test_maxsteps(self):
        for _ in range(4):
            self.assertIsNotNone(self.env.get_observation(None))
            self.env.receive_action(None, 0)
        self.assertIsNone(self.env.get_observation(None))
        self.assertEqual(self.env.final_observation(None), 2)


    def test_reset(self):
        for _ in range(3):
            self.env.receive_action(None, 1)
        self.assertEqual(self.env.t, 3)
        self.assertEqual(self.env.reset(), 2)
        self.assertEqual(self.env.t, 0)
        self.assertIs(self.env.start_episode(), self.env)


    def test_spaces(self):
        self.assertEqual(self.env.observation_space, Discrete(5))
        self.assertEqual(self.env.action_space, Discrete(2))
        with self.assertRaises(NotImplementedError):
            Environment(DiscreteDomain((0,)), DiscreteDomain((0,))).get_observation(None)



class TestDummyEnv(unittest.TestCase):

    def env_tester(self, env: Environment, rng=None):
        rng = np.random.RandomState(0) if rng is None else rng
        env = env.start_episode()
        observation = env.get_observation(None)
        steps = 0
        while observation is not None:
            self.assertIn(observation, env.observations)
            action = env.actions[rng.randint(len(env.actions))]
            self.assertIsInstance(env.receive_action(None, action), Number)
            observation = env.get_observation(None)
            steps += 1
        self.assertIn(env.final_observation(None), env.observations)
        return steps


    def test_DummyChain(self):
        env = dummy.DummyChain()
        self.env_tester(env)
        env.reset()
        self.assertEqual(env.get_observation(None), 1)
        self.assertEqual(env.receive_action(None, dummy.Move.RIGHT), 10.)
        self.assertIsNone(env.get_observation(None))
        env.reset()
        self.assertEqual(env.receive_action(None, dummy.Move.LEFT), 1.)
        self.assertEqual(env.final_observation(None), 0)


    def test_DummyRover(self):
        env = dummy.DummyRover()
        self.assertEqual(len(env.observations), 7)
        self.assertLessEqual(self.env_tester(env), env.maxsteps)
        env.reset()
        self.assertEqual(env.get_observation(None), 3)


    def test_DummyBandit(self):
        env = dummy.DummyBandit(rng=ScriptedRandom(0.5, 0.25))
        self.assertEqual(self.env_tester(env), 1)
        env.reset()
        self.assertEqual(env.get_observation(None), 0)
        self.assertAlmostEqual(env.receive_action(None, 2), 3 * 0.25 * 2)
        self.assertIsNone(env.get_observation(None))


    def test_DummyCliff(self):
        env = dummy.DummyCliff()
        self.assertEqual(len(env.observations), 48)
        self.env_tester(env)
        env.reset()
        self.assertEqual(env.receive_action(None, dummy.Walk.UP), -1.)
        self.assertEqual(env.get_observation(None), (0, 1))
        env.reset()
        self.assertEqual(env.receive_action(None, dummy.Walk.RIGHT), -100.)
        self.assertIsNone(env.get_observation(None))
        env.reset()
        env.state = (11, 1)
        self.assertEqual(env.receive_action(None, dummy.Walk.DOWN), 10.)


    def test_DummyEmpty(self):
        env = dummy.DummyEmpty()
        self.assertEqual(self.env_tester(env), 0)
        with self.assertRaises(RuntimeError):
            env.receive_action(None, 0)



class TestGymEnvironment(unittest.TestCase):


    def test_discrete(self):
        env = GymEnvironment(Corridor(), seed=0)
        self.assertEqual(list(env.observations), [0, 1, 2, 3])
        self.assertEqual(list(env.actions), [0, 1])
        self.assertIs(env.observation_space, env.env.observation_space)
        self.assertIs(env.start_episode(), env)
        self.assertEqual(env.info, {'reset': True})
        self.assertIsNone(env.seed)
        self.assertEqual(env.get_observation(None), 0)
        rewards = [env.receive_action(None, 1) for _ in range(3)]
        self.assertEqual(rewards, [0., 0., 1.])
        self.assertIsNone(env.get_observation(None))
        self.assertEqual(env.final_observation(None), 3)


    def test_truncation(self):
        env = GymEnvironment(Corridor(limit=2))
        env.reset()
        env.receive_action(None, 0)
        self.assertEqual(env.get_observation(None), 0)
        env.receive_action(None, 0)
        self.assertIsNone(env.get_observation(None))


    def test_multidiscrete(self):
        env = GymEnvironment(Grid())
        self.assertEqual(len(env.observations), 6)
        self.assertEqual(len(env.actions), 4)
        env.reset()
        self.assertEqual(env.get_observation(None), (0, 0))
        self.assertEqual(env.receive_action(None, (1, 1)), -1.)
        self.assertEqual(env.get_observation(None), (1, 1))
        env.receive_action(None, (1, 0))
        self.assertIsNone(env.get_observation(None))
        self.assertIn(env.final_observation(None), env.observations)



if __name__ == '__main__':
    unittest.main(verbosity=0)
