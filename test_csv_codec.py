#!/usr/bin/env python3
"""
Test suite for the multi-table CSV parser and serializer

Usage:
    python test_csv_codec.py
    python -m pytest test_csv_codec.py
"""

import sys
import unittest
from pathlib import Path

# Add the project root to path
current_dir = Path(__file__).parent
sys.path.insert(0, str(current_dir))

from clipcsv.utils.csv_codec import (
    CsvTableParser,
    CsvTableSerializer,
    parse,
    parse_table,
    serialize,
    split_tables,
)


class TestCsvParser(unittest.TestCase):
    """Single-segment scanning rules"""

    def test_simple_rows(self):
        self.assertEqual(parse_table("a,b\n1,2\n"), [["a", "b"], ["1", "2"]])

    def test_no_trailing_newline(self):
        self.assertEqual(parse_table("a,b\n1,2"), [["a", "b"], ["1", "2"]])

    def test_empty_fields_are_kept(self):
        self.assertEqual(parse_table("a,,c\n,,\n"), [["a", "", "c"], ["", "", ""]])

    def test_trailing_comma_flushes_empty_field(self):
        self.assertEqual(parse_table("a,"), [["a", ""]])

    def test_blank_lines_are_dropped(self):
        self.assertEqual(parse("\n\n\na,b\n"), [[["a", "b"]]])

    def test_whitespace_only_line_is_dropped(self):
        self.assertEqual(parse_table("a,b\n   \n\t\nc,d\n"), [["a", "b"], ["c", "d"]])

    def test_embedded_newline(self):
        self.assertEqual(
            parse('a,"line1\nline2",c\n'),
            [[["a", "line1\nline2", "c"]]],
        )

    def test_embedded_comma(self):
        self.assertEqual(parse_table('"x,y",z'), [["x,y", "z"]])

    def test_escaped_quote(self):
        self.assertEqual(parse('"a""b",c\n'), [[['a"b', "c"]]])

    def test_quoted_empty_field(self):
        self.assertEqual(parse_table('"",x\n'), [["", "x"]])

    def test_quote_in_middle_of_field_toggles(self):
        # Stray quotes toggle quoted state instead of failing
        self.assertEqual(parse_table('ab"c,d"e,f\n'), [["abc,de", "f"]])

    def test_unterminated_quote_runs_to_end(self):
        table = parse_table('a,"open\r\nstill, open\n')
        self.assertEqual(table, [["a", "open\r\nstill, open\n"]])

    def test_crlf_matches_lf(self):
        lf = "name,qty\nbolt,4\nnut,10\n"
        crlf = lf.replace("\n", "\r\n")
        self.assertEqual(parse(crlf), parse(lf))

    def test_carriage_return_kept_inside_quotes(self):
        self.assertEqual(parse_table('"a\r\nb"\r\n'), [["a\r\nb"]])

    def test_parser_instance_is_reusable(self):
        parser = CsvTableParser()
        self.assertEqual(parser.parse('"open'), [["open"]])
        self.assertEqual(parser.parse("x,y"), [["x", "y"]])

    def test_never_fails_on_odd_input(self):
        for text in ['"', '""', '"""', ",", "\r", "\r\n", '",\n"', "--,,--"]:
            with self.subTest(text=text):
                self.assertIsInstance(parse(text), list)


class TestMultiTableSplit(unittest.TestCase):
    """Sentinel-separated tables"""

    def test_two_tables(self):
        document = parse("a,b\n1,2\n--,,--\nx,y\n3,4\n")
        self.assertEqual(
            document,
            [[["a", "b"], ["1", "2"]], [["x", "y"], ["3", "4"]]],
        )

    def test_empty_segments_are_omitted(self):
        document = parse("--,,--\n\n--,,--\na,b\n--,,--\n   \n--,,--")
        self.assertEqual(document, [[["a", "b"]]])

    def test_segment_of_blank_rows_is_omitted(self):
        document = parse('a\n--,,--\n""\n--,,--\nb\n')
        self.assertEqual(document, [[["a"]], [["b"]]])

    def test_segments_are_stripped(self):
        self.assertEqual(split_tables("  a,b \n--,,--\n\n c \n"), ["a,b", "c"])

    def test_table_order_follows_input(self):
        document = parse("3\n--,,--\n1\n--,,--\n2")
        self.assertEqual([table[0][0] for table in document], ["3", "1", "2"])

    def test_empty_text(self):
        self.assertEqual(parse(""), [])
        self.assertEqual(parse("  \n\r\n "), [])


class TestCsvSerializer(unittest.TestCase):
    """Field escaping and joining"""

    def test_plain_field(self):
        self.assertEqual(CsvTableSerializer.escape_field("abc"), "abc")

    def test_field_with_quote(self):
        self.assertEqual(CsvTableSerializer.escape_field('say "hi", ok'), '"say ""hi"", ok"')

    def test_field_with_comma_or_newline(self):
        self.assertEqual(CsvTableSerializer.escape_field("a,b"), '"a,b"')
        self.assertEqual(CsvTableSerializer.escape_field("a\nb"), '"a\nb"')

    def test_none_and_non_string(self):
        self.assertEqual(CsvTableSerializer.escape_field(None), "")
        self.assertEqual(CsvTableSerializer.escape_field(42), "42")

    def test_tables_joined_with_separator(self):
        document = [[["a", "b"], ["1", "2"]], [["x"], ["y"]]]
        self.assertEqual(serialize(document), "a,b\n1,2\n--,,--\nx\ny")

    def test_empty_document(self):
        self.assertEqual(serialize([]), "")


class TestRoundTrip(unittest.TestCase):
    """parse(serialize(D)) == D for well-formed documents"""

    def test_round_trip_preserves_document(self):
        document = [
            [["id", "name", "notes"],
             ["1", "Bolt, hex", 'M8 "coarse"'],
             ["2", "Washer", "line1\nline2"],
             ["3", "", ""]],
            [["key", "value"],
             ["quote", '""'],
             ["ragged"]],
        ]
        self.assertEqual(parse(serialize(document)), document)

    def test_already_escaped_pairs_survive(self):
        field = 'He said ""yes""'
        document = [[[field, "x"]]]
        self.assertEqual(parse(serialize(document))[0][0][0], field)

    def test_serialize_after_parse_is_stable(self):
        text = 'a,"b,c"\n"d""e","f\ng"\n--,,--\nx,y'
        once = serialize(parse(text))
        self.assertEqual(serialize(parse(once)), once)


if __name__ == "__main__":
    unittest.main()
