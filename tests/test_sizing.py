import unittest

from atlaspacker.sizing import guess_output_width


class GuessOutputWidthTests(unittest.TestCase):
    def test_square_grid_of_median_width(self) -> None:
        # median 10, sqrt(16) = 4
        self.assertEqual(guess_output_width([10] * 16), 40)

    def test_never_narrower_than_widest(self) -> None:
        # median 10 * sqrt(3) = 17.3 -> 17, but the widest is 20
        self.assertEqual(guess_output_width([10, 10, 20]), 20)

    def test_median_is_upper_middle_after_sorting(self) -> None:
        # sorted [4, 5, 6, 12]: median index 2 -> 6, 6 * 2 = 12
        self.assertEqual(guess_output_width([12, 4, 6, 5]), 12)

    def test_product_is_rounded(self) -> None:
        # 10 * sqrt(2) = 14.14 -> 14
        self.assertEqual(guess_output_width([10, 10]), 14)
        # 9 * sqrt(5) = 20.12 -> 20
        self.assertEqual(guess_output_width([9, 9, 9, 9, 9]), 20)

    def test_single_width(self) -> None:
        self.assertEqual(guess_output_width([7]), 7)

    def test_empty_raises(self) -> None:
        with self.assertRaises(ValueError):
            guess_output_width([])


if __name__ == "__main__":
    unittest.main()
