import math
import unittest

import numpy as np

from ..exceptions import InvalidEpsilon, UnknownObservation, ConfigurationError
from ..helpers.spaces import DiscreteDomain
from .agent import EpsilonGreedyAgent
from .policy import EpsilonGreedyPolicy, argmax, total_order_key
from .random import NumpyRandom



class ScriptedRandom:
    """
    A random source that replays a fixed sequence of numbers, then repeats
    `default` forever.
    """

    def __init__(self, *values, default: float=0.99):
        self.values = list(values)
        self.default = default


    def random(self) -> float:
        return self.values.pop(0) if self.values else self.default



class TestNumpyRandom(unittest.TestCase):

    def test_seeded(self):
        a = [NumpyRandom(3).random() for _ in range(3)]
        b = NumpyRandom(np.random.RandomState(3))
        self.assertEqual(a[0], b.random())
        values = [NumpyRandom(None).random() for _ in range(100)]
        self.assertTrue(all(0. <= v < 1. for v in values))



class TestEpsilonGreedyPolicy(unittest.TestCase):


    def setUp(self):
        self.observations = DiscreteDomain(range(3), 'observations')
        self.actions = DiscreteDomain(('a', 'b', 'c'), 'actions')


    def test_invalid_epsilon(self):
        for epsilon in (-0.1, 1., 1.5):
            with self.assertRaises(InvalidEpsilon):
                EpsilonGreedyPolicy(epsilon, self.observations, self.actions, ScriptedRandom())
        # configuration errors are ValueErrors
        with self.assertRaises(ConfigurationError):
            EpsilonGreedyPolicy(1., self.observations, self.actions, ScriptedRandom())
        with self.assertRaises(ValueError):
            EpsilonGreedyPolicy(1., self.observations, self.actions, ScriptedRandom())
        EpsilonGreedyPolicy(0., self.observations, self.actions, ScriptedRandom())


    def test_random_start(self):
        rng = ScriptedRandom(0., 0.5, 0.99)
        policy = EpsilonGreedyPolicy(0., self.observations, self.actions, rng)
        self.assertEqual(policy.mapping, ['a', 'b', 'c'])


    def test_explore(self):
        # 3 draws for the initial mapping, then explore (0.1 < 0.5) action 'c'
        rng = ScriptedRandom(0., 0., 0., 0.1, 0.7, 0.9)
        policy = EpsilonGreedyPolicy(0.5, self.observations, self.actions, rng)
        self.assertEqual(policy.act(0), 'c')
        self.assertEqual(policy.act(0), 'a')


    def test_unknown_observation(self):
        policy = EpsilonGreedyPolicy(0., self.observations, self.actions, ScriptedRandom())
        with self.assertRaises(UnknownObservation):
            policy.act(3)
        with self.assertRaises(KeyError):
            policy.greedy('x')


    def test_unknown_observation_explore(self):
        # 3 draws for the initial mapping, then an exploring draw
        rng = ScriptedRandom(0., 0., 0., 0.1, 0.7)
        policy = EpsilonGreedyPolicy(0.5, self.observations, self.actions, rng)
        with self.assertRaises(UnknownObservation):
            policy.act(99)
        self.assertEqual(policy.act(0), 'c')


    def test_policy_improvement(self):
        values = {(0, 'a'): 1., (0, 'b'): 2., (0, 'c'): 0.,
                  (1, 'a'): 0., (1, 'b'): 0., (1, 'c'): 5.,
                  (2, 'a'): 3., (2, 'b'): 3., (2, 'c'): 3.}
        value_function = lambda o, a: values[(o, a)]
        policy = EpsilonGreedyPolicy(0., self.observations, self.actions, ScriptedRandom())
        policy.policy_improvement(value_function)
        # ties go to the first action
        self.assertEqual(policy.mapping, ['b', 'c', 'a'])
        self.assertEqual(policy.act(1), 'c')


    def test_policy_improvement_subset(self):
        policy = EpsilonGreedyPolicy(0., self.observations, self.actions, ScriptedRandom())
        self.assertEqual(policy.mapping, ['c', 'c', 'c'])
        policy.policy_improvement(lambda o, a: float(a == 'b'), observations=(1,))
        self.assertEqual(policy.mapping, ['c', 'b', 'c'])


    def test_idempotence(self):
        random = np.random.RandomState(1)
        table = random.rand(3, 3)
        value_function = lambda o, a: table[o, self.actions.index(a)]
        policy = EpsilonGreedyPolicy(0.1, self.observations, self.actions, NumpyRandom(1))
        policy.policy_improvement(value_function)
        first = list(policy.mapping)
        policy.policy_improvement(value_function)
        self.assertEqual(first, policy.mapping)


    def test_nan_values(self):
        value_function = lambda o, a: math.nan if a == 'a' else -1.
        self.assertEqual(argmax(value_function, 0, self.actions), 'b')
        value_function = lambda o, a: math.nan
        self.assertEqual(argmax(value_function, 0, self.actions), 'a')
        # NaN ranks with -inf, below every finite number
        self.assertFalse(total_order_key(math.nan) > total_order_key(-math.inf))
        self.assertLess(total_order_key(math.nan), total_order_key(-1e308))


    def test_no_actions(self):
        with self.assertRaises(RuntimeError):
            argmax(lambda o, a: 0., 0, ())


    def test_action_probability(self):
        rng = ScriptedRandom(0., 0., 0.)
        policy = EpsilonGreedyPolicy(0.3, self.observations, self.actions, rng)
        self.assertAlmostEqual(policy.action_probability('a', 0), 0.8)
        self.assertAlmostEqual(policy.action_probability('b', 0), 0.1)
        total = sum(policy.action_probability(a, 2) for a in self.actions)
        self.assertAlmostEqual(total, 1.)
        greedy = EpsilonGreedyPolicy(0., self.observations, self.actions, ScriptedRandom())
        self.assertEqual(greedy.action_probability('c', 0), 1.)
        self.assertEqual(greedy.action_probability('a', 0), 0.)


    def test_exploration_rate(self):
        policy = EpsilonGreedyPolicy(0.2, self.observations, self.actions, NumpyRandom(0))
        policy.policy_improvement(lambda o, a: float(a == 'a'))
        actions = [policy.act(0) for _ in range(5000)]
        greedy_rate = actions.count('a') / len(actions)
        # 1 - epsilon + epsilon / |A|
        self.assertAlmostEqual(greedy_rate, 0.8 + 0.2 / 3, delta=0.03)
        self.assertIn('b', actions)
        self.assertIn('c', actions)



class TestEpsilonGreedyAgent(unittest.TestCase):

    def test_delegation(self):
        observations = DiscreteDomain(range(2))
        actions = DiscreteDomain((0, 1))
        agent = EpsilonGreedyAgent(0., observations, actions, rng=ScriptedRandom(0., 0.))
        self.assertEqual(agent.act(1), 0)
        agent.policy_improvement(lambda o, a: float(o == a))
        self.assertEqual(agent.act(1), 1)
        self.assertEqual(agent.recommend(0), 0)
        self.assertEqual(agent.action_probability(1, 1), 1.)
        self.assertEqual(str(agent), 'EpsilonGreedyAgent')


    def test_seed(self):
        observations = DiscreteDomain(range(10))
        actions = DiscreteDomain(range(4))
        a = EpsilonGreedyAgent(0.5, observations, actions, rng=7)
        b = EpsilonGreedyAgent(0.5, observations, actions, rng=7)
        self.assertEqual(a.policy.mapping, b.policy.mapping)
        self.assertIsInstance(a.policy.rng, NumpyRandom)
        c = EpsilonGreedyAgent(0.5, observations, actions, rng=np.int64(7))
        self.assertIsInstance(c.policy.rng, NumpyRandom)
        self.assertEqual(a.policy.mapping, c.policy.mapping)



if __name__ == '__main__':
    unittest.main(verbosity=0)
