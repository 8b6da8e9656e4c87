import unittest

from htstree import validate_nodes, level_sizes, StructureError, InputTypeError


class TestValidateNodes(unittest.TestCase):

    def test_valid(self):
        self.assertEqual(validate_nodes([[2], [3, 2]], 5), [[2], [3, 2]])
        self.assertEqual(validate_nodes([2, [3, 2]], 5), [[2], [3, 2]])
        self.assertEqual(validate_nodes(((2,), (3, 2))), [[2], [3, 2]])

    def test_default(self):
        self.assertEqual(validate_nodes(None, 4), [[4]])

    def test_terminal_mismatch(self):
        with self.assertRaises(StructureError) as cm:
            validate_nodes([2, [3, 2]], 6)
        msg = str(cm.exception)
        self.assertIn("terminal node count mismatch", msg)
        self.assertIn("5", msg)
        self.assertIn("6", msg)

    def test_root(self):
        with self.assertRaises(StructureError) as cm:
            validate_nodes([[1, 1], [1, 1]], 2)
        self.assertIn("root node cannot be empty", str(cm.exception))

    def test_levels_do_not_reconcile(self):
        with self.assertRaises(StructureError) as cm:
            validate_nodes([[2], [3, 2, 1]], 6)
        self.assertIn("level 0 and level 1", str(cm.exception))

    def test_bad_types(self):
        with self.assertRaises(InputTypeError):
            validate_nodes("abc", 3)
        with self.assertRaises(InputTypeError):
            validate_nodes(5, 5)
        with self.assertRaises(StructureError):
            validate_nodes([[2], [0, 2]], 2)
        with self.assertRaises(StructureError):
            validate_nodes([], 2)

    def test_level_mapping(self):
        nodes = {"Level 2": [3, 2], "Level 1": [2]}
        self.assertEqual(validate_nodes(nodes, 5), [[2], [3, 2]])
        with self.assertRaises(StructureError):
            validate_nodes({"Level 1": [2], "Level 3": [3, 2]}, 5)
        with self.assertRaises(StructureError):
            validate_nodes({"Level 1": [2], "Level 2": [3, 2]}, 6)

    def test_level_sizes(self):
        self.assertEqual(level_sizes([[2], [3, 2]]), [1, 2, 5])
        self.assertEqual(level_sizes([[2], [2, 2], [3, 4, 3, 4]]), [1, 2, 4, 14])


if __name__ == '__main__':
    unittest.main()
