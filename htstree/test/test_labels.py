import unittest

from htstree import hier_name, build_labels


class TestLabels(unittest.TestCase):

    def test_default(self):
        self.assertEqual(hier_name([[2], [3, 2]]), {
            "Level 0": ["Total"],
            "Level 1": ["A", "B"],
            "Level 2": ["AA", "AB", "AC", "BA", "BB"],
        })

    def test_two_levels(self):
        self.assertEqual(hier_name([[3]]), {"Level 0": ["Total"], "Level 1": ["A", "B", "C"]})

    def test_three_levels(self):
        labels = hier_name([[2], [2, 1], [1, 2, 2]])
        self.assertEqual(labels["Level 2"], ["AA", "AB", "BA"])
        self.assertEqual(labels["Level 3"], ["AAA", "ABA", "ABB", "BAA", "BAB"])

    def test_more_than_26_children(self):
        labels = hier_name([[28]])
        self.assertEqual(labels["Level 1"][25:], ["Z", "AA", "AB"])
        self.assertEqual(len(set(labels["Level 1"])), 28)

    def test_deterministic(self):
        nodes = [[2], [2, 2], [3, 4, 3, 4]]
        self.assertEqual(hier_name(nodes), hier_name(nodes))

    def test_bottom_names(self):
        labels = build_labels([[2], [3, 2]], ["a", "b", "c", "d", "e"])
        self.assertEqual(labels["Level 1"], ["A", "B"])
        self.assertEqual(labels["Level 2"], ["a", "b", "c", "d", "e"])
        self.assertEqual(build_labels([[2], [3, 2]]), hier_name([[2], [3, 2]]))


if __name__ == '__main__':
    unittest.main()
