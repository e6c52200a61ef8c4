import math
import unittest
from itertools import product

import numpy as np

from ..exceptions import DomainError
from ..helpers.spaces import DiscreteDomain
from .tabular import Tabular, TabularView



class TestTabular(unittest.TestCase):


    def setUp(self):
        self.observations = DiscreteDomain(('x', 'y', 'z', 'w'))
        self.actions = DiscreteDomain(('l', 'r', 'u'))
        self.table = Tabular(self.observations, self.actions)


    def test_index_bijection(self):
        indices = [self.table.index(o, a) for o, a in \
                   product(self.observations, self.actions)]
        self.assertEqual(sorted(indices), list(range(4 * 3)))
        self.assertEqual(self.table.index('y', 'l'), 3)
        self.assertEqual(self.table.index('w', 'u'), 11)
        for i in range(len(self.table)):
            self.assertEqual(self.table.index(*self.table.pair(i)), i)


    def test_unknown_pair(self):
        with self.assertRaises(DomainError):
            self.table.index('v', 'l')
        with self.assertRaises(DomainError):
            self.table['x', 'd']


    def test_default(self):
        table = Tabular(self.observations, self.actions, default=-1.)
        self.assertTrue(np.all(table.values == -1.))
        self.assertTrue(np.all(table.visits == 0))


    def test_update(self):
        self.table['x', 'r'] = 2.
        delta = self.table.update('x', 'r', 5.)
        self.assertEqual(delta, 9.)
        self.assertEqual(self.table['x', 'r'], 5.)
        self.assertEqual(self.table.update('x', 'r', 5.), 0.)


    def test_visit(self):
        self.assertEqual(self.table.visit('z', 'u'), 1)
        self.assertEqual(self.table.visit('z', 'u'), 2)
        self.assertEqual(self.table.visits.sum(), 2)
        self.assertEqual(self.table.table(visits=True)[2, 2], 2)


    def test_view(self):
        view = self.table.view()
        self.assertIsInstance(view, TabularView)
        self.table['y', 'u'] = 3.
        # views read the live table
        self.assertEqual(view('y', 'u'), 3.)
        self.assertEqual(view.max('y'), 3.)
        self.assertEqual(view.max('x'), 0.)


    def test_max_nan(self):
        self.table['x', 'l'] = math.nan
        self.table['x', 'r'] = -4.
        self.table['x', 'u'] = -2.
        self.assertEqual(self.table.max('x'), -2.)


    def test_table(self):
        self.table['w', 'l'] = 1.
        table = self.table.table()
        self.assertEqual(table.shape, (4, 3))
        self.assertEqual(table[3, 0], 1.)
        table[0, 0] = 7.
        self.assertEqual(self.table['x', 'l'], 0.)



if __name__ == '__main__':
    unittest.main(verbosity=0)
