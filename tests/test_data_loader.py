import os
import shutil
import tempfile
import unittest

from intervalbill.data_loader import parse_decimal, parse_integer, read_text_table
from intervalbill.errors import ParseError


class TestNumberParsing(unittest.TestCase):
    def test_decimals(self):
        self.assertEqual(parse_decimal("0.5"), 0.5)
        self.assertEqual(parse_decimal("-0.05"), -0.05)
        self.assertEqual(parse_decimal("+2"), 2.0)
        self.assertEqual(parse_decimal("1."), 1.0)
        self.assertEqual(parse_decimal(".25"), 0.25)
        self.assertEqual(parse_decimal("1e-3"), 0.001)
        self.assertEqual(parse_decimal("2.5E2"), 250.0)

    def test_rejects_what_float_would_accept(self):
        for bad in ["1_000", " 1.5", "1.5 ", "nan", "NaN", "inf", "-Infinity", "١"]:
            with self.assertRaises(ParseError, msg=bad):
                parse_decimal(bad)

    def test_rejects_garbage(self):
        for bad in ["", ".", "-", "1e", "0x10", "1,5", "1.2.3", "e5"]:
            with self.assertRaises(ParseError, msg=bad):
                parse_decimal(bad)

    def test_location_is_kept(self):
        with self.assertRaises(ParseError) as ctx:
            parse_decimal("x", "tariff.csv", 3, "rate")
        self.assertEqual((ctx.exception.source, ctx.exception.row, ctx.exception.column), ("tariff.csv", 3, "rate"))
        self.assertEqual(str(ctx.exception), "expected a number, got 'x' (tariff.csv, row 3, column rate)")

    def test_integers(self):
        self.assertEqual(parse_integer("5"), 5)
        self.assertEqual(parse_integer("-1"), -1)
        for bad in ["5.0", " 5", "1_0", "", "five"]:
            with self.assertRaises(ParseError, msg=bad):
                parse_integer(bad)


class TestReadTextTable(unittest.TestCase):
    def setUp(self):
        self.test_dir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.test_dir)

    def _write(self, content: bytes):
        path = os.path.join(self.test_dir, "table.csv")
        with open(path, "wb") as f:
            f.write(content)
        return path

    def test_cells_are_text(self):
        df = read_text_table(self._write(b"a,b\n007,1.50\n"))
        self.assertEqual(df.iloc[0].tolist(), ["007", "1.50"])

    def test_extra_field(self):
        path = self._write(b"a,b\n1,2\n1,2,3\n")
        with self.assertRaises(ParseError) as ctx:
            read_text_table(path)
        self.assertEqual(ctx.exception.source, path)

    def test_not_utf8(self):
        path = self._write(b"a,b\n\xff\xfe1,2\n")
        with self.assertRaises(ParseError) as ctx:
            read_text_table(path)
        self.assertEqual(ctx.exception.source, path)

    def test_empty(self):
        path = self._write(b"")
        with self.assertRaises(ParseError):
            read_text_table(path)
        self.assertTrue(read_text_table(path, allow_empty=True).empty)


if __name__ == "__main__":
    unittest.main()
