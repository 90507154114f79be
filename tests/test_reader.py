from io import StringIO, BytesIO

import unittest

from tokscan.reader import Reader
from tokscan.errors import ReaderError


class ReaderTest(unittest.TestCase):
    def test_read_string(self):
        s = "hello world"
        r = Reader(s)

        clue = s
        self.assertFalse(r.eof)
        self.assertEqual(list(clue), list(r))
        self.assertEqual(r.name, "<string>")
        self.assertTrue(r.eof)

    def test_read_stream(self):
        s = "hello world"
        stream = StringIO(s)
        r = Reader(stream)

        clue = s
        self.assertFalse(r.eof)
        self.assertEqual(list(clue), list(r))
        self.assertEqual(r.name, "<stream>")
        self.assertTrue(r.eof)

    def test_read_binary_stream(self):
        stream = BytesIO("привет".encode("utf-8"))
        r = Reader(stream)

        self.assertEqual("".join(r), "привет")

    def test_binary_stream_encoding(self):
        stream = BytesIO("мир".encode("cp1251"))
        r = Reader(stream, encoding="cp1251")

        self.assertEqual("".join(r), "мир")

    def test_binary_stream_keeps_line_endings(self):
        r = Reader(BytesIO(b"a\r\nb\rc"))

        self.assertEqual("".join(r), "a\r\nb\rc")

    def test_read_returns_empty_string_at_end(self):
        r = Reader("a")

        self.assertEqual(r.read(), "a")
        self.assertEqual(r.read(), "")
        self.assertEqual(r.read(), "")

    def test_small_buffer(self):
        s = "abcdefghij"
        r = Reader(StringIO(s), bufsize=3)

        self.assertEqual("".join(r), s)

    def test_wrong_source_type(self):
        with self.assertRaises(TypeError):
            Reader(42)

    def test_line_count(self):
        s = "line 1\nline2\nline3"
        r = Reader(s)
        _ = list(r)

        self.assertEqual(r.line, 3)

    def test_column_count(self):
        s = "123456"
        r = Reader(s)
        _ = list(r)

        self.assertEqual(r.column, 6)


class MarkResetTest(unittest.TestCase):
    def test_reset_to_mark(self):
        r = Reader("abcd")
        r.read()
        r.mark(2)

        self.assertEqual(r.read(), "b")
        self.assertEqual(r.read(), "c")
        r.reset()
        self.assertEqual("".join(r), "bcd")

    def test_reset_restores_line_and_column(self):
        r = Reader("a\nb")
        r.read()
        r.mark(2)
        r.read()
        r.read()
        self.assertEqual(r.line, 2)

        r.reset()
        self.assertEqual((r.line, r.column), (1, 1))

    def test_reset_at_end_of_input(self):
        r = Reader("ab")
        r.read()
        r.mark(2)
        r.read()
        self.assertEqual(r.read(), "")

        r.reset()
        self.assertEqual(r.read(), "b")

    def test_reset_across_buffer_refill(self):
        r = Reader(StringIO("abcdefgh"), bufsize=2)
        r.read()
        r.mark(4)
        chars = [r.read() for _ in range(4)]
        self.assertEqual(chars, list("bcde"))

        r.reset()
        self.assertEqual("".join(r), "bcdefgh")

    def test_reset_without_mark(self):
        r = Reader("abc")

        with self.assertRaises(ReaderError):
            r.reset()

    def test_reset_past_limit(self):
        r = Reader("abcdef")
        r.mark(2)
        for _ in range(3):
            r.read()

        with self.assertRaises(ReaderError):
            r.reset()

    def test_negative_limit(self):
        with self.assertRaises(ValueError):
            Reader("abc").mark(-1)


class CloseTest(unittest.TestCase):
    def test_close_stream(self):
        stream = StringIO("abc")
        r = Reader(stream)
        r.close()

        self.assertTrue(r.closed)
        self.assertTrue(stream.closed)

    def test_close_twice(self):
        r = Reader(StringIO("abc"))
        r.close()
        r.close()

        self.assertTrue(r.closed)

    def test_read_after_close(self):
        r = Reader("abc")
        r.close()

        with self.assertRaises(ReaderError):
            r.read()
