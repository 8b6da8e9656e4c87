import unittest

import numpy as np

from htstree import gmatrix, inv_s, mnodes, smatrix, StructureError

NODE_SETS = [
    [[5]],
    [[2], [3, 2]],
    [[2], [2, 2], [3, 4, 3, 4]],
    [[3], [1, 2, 1], [2, 1, 3, 1]],
]


class TestGmatrix(unittest.TestCase):

    def test_example(self):
        self.assertTrue(np.array_equal(gmatrix([2, [3, 2]]), np.array([
            [1, 1, 1, 1, 1],
            [1, 1, 1, 2, 2],
            [1, 2, 3, 4, 5],
        ])))

    def test_three_levels(self):
        gmat = gmatrix([[2], [2, 2], [3, 4, 3, 4]])
        self.assertEqual(gmat.shape, (4, 14))
        self.assertTrue(np.array_equal(gmat[1], [1] * 7 + [2] * 7))
        self.assertTrue(np.array_equal(gmat[2], np.repeat([1, 2, 3, 4], [3, 4, 3, 4])))

    def test_properties(self):
        for nodes in NODE_SETS:
            gmat = gmatrix(nodes)
            n = sum(nodes[-1])
            self.assertTrue(np.all(gmat[0] == 1))
            self.assertTrue(np.array_equal(gmat[-1], np.arange(1, n + 1)))
            self.assertEqual([len(np.unique(row)) for row in gmat], mnodes(nodes))
            # ancestors never decrease from left to right
            self.assertTrue(np.all(np.diff(gmat, axis=1) >= 0))

    def test_invalid(self):
        with self.assertRaises(StructureError):
            gmatrix([[2], [3, 2, 1]])


class TestScaling(unittest.TestCase):

    def test_inv_s(self):
        self.assertTrue(np.allclose(inv_s([[2], [3, 2]]), [1 / 5, 1 / 3, 1 / 2, 1, 1, 1, 1, 1]))
        self.assertEqual(inv_s([[2], [3, 2]])[1], 1.0 / 3)

    def test_properties(self):
        for nodes in NODE_SETS:
            s = inv_s(nodes)
            n = sum(nodes[-1])
            self.assertEqual(len(s), sum(mnodes(nodes)))
            self.assertTrue(np.all((s > 0) & (s <= 1)))
            self.assertTrue(np.all(s[-n:] == 1.0))

    def test_mnodes(self):
        self.assertEqual(mnodes([[2], [3, 2]]), [1, 2, 5])


class TestSmatrix(unittest.TestCase):

    def test_example(self):
        s = smatrix([[2], [3, 2]])
        self.assertTrue(np.array_equal(s.toarray(), np.array([
            [1, 1, 1, 1, 1],
            [1, 1, 1, 0, 0],
            [0, 0, 0, 1, 1],
            [1, 0, 0, 0, 0],
            [0, 1, 0, 0, 0],
            [0, 0, 1, 0, 0],
            [0, 0, 0, 1, 0],
            [0, 0, 0, 0, 1],
        ])))

    def test_row_sums(self):
        for nodes in NODE_SETS:
            s = smatrix(nodes)
            self.assertTrue(np.allclose(1 / np.asarray(s.sum(axis=1)).reshape(-1), inv_s(nodes)))
            self.assertTrue(np.all(np.asarray(s.sum(axis=0)).reshape(-1) == len(nodes) + 1))


if __name__ == '__main__':
    unittest.main()
