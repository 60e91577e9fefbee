import unittest

from alphabet import ALPHA26, Alphabet
from errors import DuplicateError, EnigmaError, NotFoundError, RangeError


class TestAlphabet(unittest.TestCase):
    def test_default_is_upper_case_letters(self) -> None:
        alpha = Alphabet()
        self.assertEqual(alpha.chars, ALPHA26)
        self.assertEqual(alpha.size(), 26)
        self.assertEqual(len(alpha), 26)

    def test_index_and_char_are_inverse(self) -> None:
        alpha = Alphabet("XYZ01")
        for i in range(alpha.size()):
            self.assertEqual(alpha.to_int(alpha.to_char(i)), i)
        self.assertEqual(alpha.to_int("0"), 3)
        self.assertEqual(alpha.to_char(4), "1")

    def test_contains(self) -> None:
        alpha = Alphabet("ABCD")
        self.assertTrue(alpha.contains("C"))
        self.assertFalse(alpha.contains("E"))
        self.assertIn("A", alpha)
        self.assertNotIn("a", alpha)

    def test_duplicate_rejected(self) -> None:
        with self.assertRaises(DuplicateError):
            Alphabet("AAB")
        with self.assertRaises(ValueError):
            Alphabet("ABCA")

    def test_index_out_of_range(self) -> None:
        alpha = Alphabet("ABCD")
        with self.assertRaises(RangeError):
            alpha.to_char(4)
        with self.assertRaises(RangeError):
            alpha.to_char(-1)
        with self.assertRaises(IndexError):
            alpha.to_char(10)

    def test_unknown_character(self) -> None:
        alpha = Alphabet("ABCD")
        with self.assertRaises(NotFoundError):
            alpha.to_int("E")
        with self.assertRaises(EnigmaError):
            alpha.to_int("")

    def test_equality_by_characters(self) -> None:
        self.assertEqual(Alphabet("ABC"), Alphabet("ABC"))
        self.assertNotEqual(Alphabet("ABC"), Alphabet("ACB"))


if __name__ == "__main__":
    unittest.main()
