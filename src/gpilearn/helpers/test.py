import unittest
from enum import Enum

import numpy as np
from gymnasium.spaces import Box, Discrete, MultiBinary, MultiDiscrete
from gymnasium.spaces import Tuple as TupleSpace

from ..exceptions import DomainError
from . import spaces
from .spaces import DiscreteDomain
from .returns import discounted_return



class Color(Enum):
    RED = 0
    GREEN = 1
    BLUE = 2



class TestDiscreteDomain(unittest.TestCase):


    def test_index(self):
        domain = DiscreteDomain(('a', 'b', 'c'))
        self.assertEqual([domain.index(x) for x in 'abc'], [0, 1, 2])
        self.assertEqual(len(domain), 3)
        self.assertEqual(domain[1], 'b')
        self.assertIn('c', domain)
        self.assertNotIn('d', domain)


    def test_unknown_element(self):
        domain = DiscreteDomain(range(3), 'cells')
        with self.assertRaises(DomainError):
            domain.index(3)
        # unhashable elements are never members
        with self.assertRaises(DomainError):
            domain.index([0])
        self.assertNotIn([0], domain)
        # DomainError is a KeyError
        with self.assertRaises(KeyError):
            domain.index(-1)


    def test_duplicates(self):
        with self.assertRaises(ValueError):
            DiscreteDomain((1, 2, 1))


    def test_enum(self):
        domain = DiscreteDomain(Color)
        self.assertEqual(domain.index(Color.BLUE), 2)
        self.assertEqual(list(domain), [Color.RED, Color.GREEN, Color.BLUE])


    def test_equality(self):
        self.assertEqual(DiscreteDomain(range(3)), DiscreteDomain((0, 1, 2)))
        self.assertNotEqual(DiscreteDomain(range(3)), DiscreteDomain((2, 1, 0)))


    def test_to_space(self):
        space = DiscreteDomain('abcd').to_space()
        self.assertIsInstance(space, Discrete)
        self.assertEqual(space.n, 4)



class TestSpaces(unittest.TestCase):


    def setUp(self):
        self.discspace = Discrete(3, start=1)
        self.binspace = MultiBinary(2)
        self.multispace = MultiDiscrete([3, 2])
        self.boxspace = Box(low=0, high=4, shape=(2,), dtype=int)
        self.boxcont = Box(low=0, high=4, shape=(2,), dtype=float)
        self.tuplespace = TupleSpace((self.multispace, self.binspace, self.discspace))


    def test_from_space_atomic(self):
        d = DiscreteDomain.from_space(self.discspace)
        self.assertEqual(list(d), [1, 2, 3])
        b = DiscreteDomain.from_space(self.binspace)
        self.assertEqual(len(b), 4)
        self.assertIn((1, 0), b)
        m = DiscreteDomain.from_space(self.multispace)
        self.assertEqual(len(m), 6)
        self.assertEqual(m[0], (0, 0))
        self.assertEqual(m[-1], (2, 1))
        i = DiscreteDomain.from_space(self.boxspace)
        self.assertEqual(len(i), 5**2)


    def test_from_space_composite(self):
        t = DiscreteDomain.from_space(self.tuplespace)
        self.assertEqual(len(t), 6*4*3)
        self.assertEqual(len(t[0]), 5)


    def test_continuous_space(self):
        with self.assertRaises(ValueError):
            DiscreteDomain.from_space(self.boxcont)


    def test_len_space_tuple(self):
        self.assertEqual(spaces.len_space_tuple(self.tuplespace), 5)
        self.assertEqual(spaces.len_space_tuple(self.discspace), 1)


    def test_samples_are_members(self):
        for space in (self.discspace, self.binspace, self.multispace,\
                      self.boxspace, self.tuplespace):
            domain = DiscreteDomain.from_space(space)
            space.seed(0)
            for _ in range(10):
                element = spaces.to_element(space, space.sample())
                self.assertIn(element, domain)


    def test_to_sample(self):
        sample = spaces.to_sample(self.multispace, (2, 1))
        self.assertIsInstance(sample, np.ndarray)
        self.assertTrue(self.multispace.contains(sample))
        sample = spaces.to_sample(self.tuplespace, (2, 1, 0, 1, 3))
        self.assertTrue(self.tuplespace.contains(sample))
        self.assertEqual(sample[2], 3)
        self.assertEqual(spaces.to_element(self.tuplespace, sample), (2, 1, 0, 1, 3))



class TestReturns(unittest.TestCase):


    def test_recursion(self):
        random = np.random.RandomState(0)
        for discount in (0., 0.5, 0.9, 1.):
            rewards = random.uniform(-5, 5, size=20)
            returns = discounted_return(rewards, discount)
            self.assertEqual(len(returns), len(rewards))
            self.assertAlmostEqual(returns[-1], rewards[-1])
            for t in range(len(rewards) - 1):
                self.assertAlmostEqual(returns[t], rewards[t] + discount * returns[t+1])


    def test_values(self):
        returns = discounted_return([1., 2., 3.], 0.5)
        np.testing.assert_allclose(returns, [1 + 0.5 * 2 + 0.25 * 3, 2 + 0.5 * 3, 3])


    def test_undiscounted(self):
        returns = discounted_return(np.ones(1000), 1.)
        self.assertEqual(returns[0], 1000.)
        self.assertEqual(returns[-1], 1.)


    def test_empty(self):
        self.assertEqual(len(discounted_return([], 0.9)), 0)



if __name__ == '__main__':
    unittest.main(verbosity=0)
