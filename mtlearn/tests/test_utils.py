""" Test the loaders, random state helpers and chain orders
"""
import os
import shutil
import tempfile
import unittest

import numpy as np
from numpy.testing import assert_array_equal

from mtlearn.ordering import (
    check_chain,
    natural_order,
    no_parents,
    parents_in_chain,
    random_order,
)
from mtlearn.utils import load_arff, load_data, seed_random_state

TOY_ARFF = """@relation 'toy: -C 2'

@attribute a {0,1}
@attribute b {x,y,z}
@attribute f1 numeric
@attribute f2 numeric

@data
1,x,0.5,1.0
0,z,-1.0,2.0
1,y,0.0,0.0
"""


class LoadArffTestCase(unittest.TestCase):

    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.tmpdir)

    def _write(self, name, content):
        path = os.path.join(self.tmpdir, name)
        with open(path, "w") as fp:
            fp.write(content)
        return path

    def test_load_arff(self):
        path = self._write("toy.arff", TOY_ARFF)
        dataset = load_arff(path)
        self.assertEqual(dataset.n_targets, 2)
        self.assertEqual(dataset.schema.n_features, 2)
        self.assertEqual(dataset.schema.attributes[1].values, ('x', 'y', 'z'))
        assert_array_equal(dataset.Y, [[1, 0], [0, 2], [1, 1]])
        assert_array_equal(dataset.X, [[0.5, 1.0], [-1.0, 2.0], [0.0, 0.0]])

    def test_load_data(self):
        self._write("toy.arff", TOY_ARFF)
        dataset = load_data(os.path.join(self.tmpdir, "toy"))
        self.assertEqual(len(dataset), 3)

    def test_missing_target_option(self):
        path = self._write("bad.arff", TOY_ARFF.replace(": -C 2", ""))
        with self.assertRaises(ValueError):
            load_arff(path)


class RandomStateTestCase(unittest.TestCase):

    def test_seed_random_state(self):
        self.assertEqual(seed_random_state(3).randint(1000),
                         np.random.RandomState(3).randint(1000))
        random_state = np.random.RandomState(1)
        self.assertIs(seed_random_state(random_state), random_state)
        with self.assertRaises(ValueError):
            seed_random_state("seed")


class OrderingTestCase(unittest.TestCase):

    def test_check_chain(self):
        self.assertEqual(check_chain(None, 3), (0, 1, 2))
        self.assertEqual(check_chain([2, 0, 1], 3), (2, 0, 1))
        with self.assertRaises(ValueError):
            check_chain([0, 0, 1], 3)
        with self.assertRaises(ValueError):
            check_chain([0, 1], 3)

    def test_random_order(self):
        chain = random_order(6, 1126)
        self.assertEqual(sorted(chain), list(range(6)))
        self.assertEqual(chain, random_order(6, 1126))

    def test_parents(self):
        self.assertEqual(parents_in_chain((1, 0, 2)),
                         {1: (), 0: (1,), 2: (1, 0)})
        self.assertEqual(no_parents(natural_order(2)), {0: (), 1: ()})


if __name__ == '__main__':
    unittest.main()
