import unittest

from ec_groups.fields import (
    PrimeField,
    bit_length,
    is_square,
    non_square,
    safe_inverse,
    sgn0,
    sqrt,
    to_bits,
    to_field,
)


class Fields(unittest.TestCase):
    def setUp(self):
        self.gf = PrimeField(11)

    def test_safe_inverse(self):
        gf = self.gf
        self.assertEqual(safe_inverse(gf(0)), 0)
        self.assertEqual(safe_inverse(gf(2)), 6)
        self.assertEqual(safe_inverse(gf(2)) * 2, 1)

    def test_squares(self):
        gf = self.gf
        squares = {1, 3, 4, 5, 9}
        for v in range(1, 11):
            self.assertEqual(is_square(gf(v)), v in squares)
        self.assertEqual(sqrt(gf(5)) ** 2, 5)
        self.assertEqual(non_square(gf), 2)
        self.assertEqual(non_square(PrimeField(7)), 3)

    def test_sgn0(self):
        gf = self.gf
        self.assertEqual(sgn0(gf(3)), 1)
        self.assertEqual(sgn0(gf(-3)), 0)
        self.assertEqual(sgn0(gf(0)), 0)

    def test_to_bits(self):
        self.assertEqual(to_bits(5, 4), [1, 0, 1, 0])
        self.assertEqual(to_bits(0, 3), [0, 0, 0])
        self.assertEqual(to_bits(self.gf(10), 4), [0, 1, 0, 1])
        self.assertRaises(ValueError, to_bits, 16, 4)
        self.assertRaises(ValueError, to_bits, -1, 4)
        self.assertEqual(bit_length(self.gf), 4)

    def test_to_field(self):
        gf = self.gf
        self.assertEqual(to_field(gf, 13), 2)
        x = gf(4)
        self.assertIs(to_field(gf, x), x)


if __name__ == "__main__":
    unittest.main()
