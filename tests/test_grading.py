import unittest

from resultmanager.core.grades import derive_grade, grade_color


class GradingTests(unittest.TestCase):
    def test_grade_bands(self):
        self.assertEqual(derive_grade(95), "A+")
        self.assertEqual(derive_grade(85), "A")
        self.assertEqual(derive_grade(72), "B")
        self.assertEqual(derive_grade(61), "C")
        self.assertEqual(derive_grade(55), "D")
        self.assertEqual(derive_grade(20), "F")

    def test_band_boundaries(self):
        expected = {100: "A+", 90: "A+", 89: "A", 80: "A", 79: "B", 70: "B", 69: "C", 60: "C", 59: "D", 50: "D", 49: "F", 0: "F"}
        for marks, letter in expected.items():
            with self.subTest(marks=marks):
                self.assertEqual(derive_grade(marks), letter)

    def test_out_of_range_rejected(self):
        with self.assertRaises(ValueError):
            derive_grade(-1)
        with self.assertRaises(ValueError):
            derive_grade(101)

    def test_grade_colors(self):
        colors = {grade_color(letter) for letter in ("A+", "A", "B", "C", "D", "F")}
        self.assertEqual(len(colors), 6)
        self.assertIsNone(grade_color("Z"))
        self.assertIsNone(grade_color(None))


if __name__ == "__main__":
    unittest.main()
