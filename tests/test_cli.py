import json
import unittest

from pathlib import Path

from click.testing import CliRunner

from tokscan.__main__ import main


class TestTokensCommand(unittest.TestCase):

    def setUp(self):
        self.runner = CliRunner()

    def invoke(self, *args, input=None):
        return self.runner.invoke(main, list(args), input=input)

    def test_join_lines(self):
        result = self.invoke("tokens", "-d", "line_separator=\\n", "-",
                             input="  a   b\n\n\nc\td  \n")

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(result.output, "a b\n\n\nc d\n")

    def test_json(self):
        result = self.invoke("tokens", "--json", "-d", "line_separator=\\n",
                             "-", input="x 0x10\n7")

        self.assertEqual(result.exit_code, 0, result.output)
        records = [json.loads(line) for line in result.output.splitlines()]
        self.assertEqual([r["kind"] for r in records], ["word", "hex", "int"])
        self.assertEqual([r["value"] for r in records], [None, 16, 7])
        self.assertEqual(records[2]["skipped_lines"], 1)

    def test_file_argument(self):
        with self.runner.isolated_filesystem():
            Path("input.txt").write_bytes("один два".encode("cp1251"))
            result = self.invoke("tokens", "-d", "encoding=cp1251",
                                 "input.txt")

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(result.output, "один два\n")

    def test_config_file(self):
        with self.runner.isolated_filesystem():
            Path("conf.py").write_text('delimiters = ","\n')
            result = self.invoke("tokens", "-c", "conf.py", "-", input="a,b")

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(result.output, "a b\n")

    def test_config_file_with_imports(self):
        with self.runner.isolated_filesystem():
            Path("conf.py").write_text("import os\ndelimiters = ','\n")
            result = self.invoke("tokens", "-c", "conf.py", "-", input="a,b")

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(result.output, "a b\n")

    def test_invalid_encoding(self):
        result = self.invoke("tokens", "-", input=b"ab \xff\xfe cd")

        self.assertEqual(result.exit_code, 1)
        self.assertIsInstance(result.exception, SystemExit)
        self.assertIn("can't decode", result.output)

    def test_bad_option(self):
        result = self.invoke("tokens", "-d", "int_bits=12", "-", input="a")

        self.assertEqual(result.exit_code, 1)
        self.assertIn("int_bits", result.output)

    def test_empty_line_separator(self):
        result = self.invoke("tokens", "-d", "line_separator=", "-",
                             input="a")

        self.assertEqual(result.exit_code, 1)


class TestNumbersCommand(unittest.TestCase):

    def setUp(self):
        self.runner = CliRunner()

    def test_numbers(self):
        result = self.runner.invoke(
            main, ["numbers", "-"], input="42 0x2a word -7 0xffffffff")

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(result.output.split(), ["42", "42", "-7", "-1"])

    def test_int_bits(self):
        result = self.runner.invoke(
            main, ["numbers", "-d", "int_bits=64", "-"], input="0xffffffff")

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(result.output, "4294967295\n")

    def test_strict(self):
        result = self.runner.invoke(
            main, ["numbers", "--strict", "-"], input="1 two 3")

        self.assertEqual(result.exit_code, 1)
        self.assertIn("not a number: 'two'", result.output)
