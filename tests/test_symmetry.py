"""Tests for primitivity under reversal and complement."""
import sys, os
import unittest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from subword_minmax.symmetry import symmetry_multiplicity, is_primitive, class_size


class TestMultiplicity(unittest.TestCase):
    def test_partition_sums(self):
        for n in range(1, 13):
            mults = [symmetry_multiplicity(b, n) for b in range(1 << (n - 1))]
            self.assertEqual(sum(mults), 1 << (n - 1))
            self.assertEqual(sum(2 * m for m in mults), 1 << n)

    def test_multiplicity_is_half_class(self):
        for n in range(1, 11):
            for b in range(1 << (n - 1)):
                m = symmetry_multiplicity(b, n)
                if m:
                    self.assertEqual(2 * m, class_size(b, n))

    def test_one_primitive_per_class(self):
        n = 8
        classes = {}
        for b in range(1 << n):
            rev = int(format(b, "08b")[::-1], 2)
            key = min(b, rev, b ^ 0xFF, rev ^ 0xFF)
            classes.setdefault(key, []).append(b)
        for key, members in classes.items():
            prims = [b for b in members if is_primitive(b, n)]
            self.assertEqual(prims, [key])

    def test_examples(self):
        self.assertEqual(symmetry_multiplicity(0b0011, 4), 1)   # complement of reversal
        self.assertEqual(symmetry_multiplicity(0b0110, 4), 1)   # palindrome
        self.assertEqual(symmetry_multiplicity(0b0001, 4), 2)
        self.assertEqual(symmetry_multiplicity(0b0111, 4), 0)   # 0001 is in the same class
        self.assertFalse(is_primitive(0b1000, 4))


if __name__ == '__main__':
    unittest.main()
