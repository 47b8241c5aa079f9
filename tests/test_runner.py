"""
Test suite for the pipeline driver and script loading.
"""

import unittest
import sys
import os
import tempfile

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from loxpy.config import InterpreterConfig
from loxpy.lexer.literals import NumberLiteral, StringLiteral
from loxpy.runner import (
    EXIT_DATA_ERROR, EXIT_OK, EXIT_SOFTWARE,
    RunResult, ScriptLoadError, load_source, run, run_file
)


class TestRun(unittest.TestCase):
    """Test cases for one pass through the pipeline."""

    def setUp(self):
        self.output = []

    def _run(self, source: str, **kwargs) -> RunResult:
        return run(source, echo=self.output.append, **kwargs)

    def test_success_prints_value(self):
        result = self._run("1 + 2")

        self.assertEqual(self.output, ["3"])
        self.assertEqual(result.value, NumberLiteral(3.0))
        self.assertFalse(result.has_errors)
        self.assertEqual(result.exit_code, EXIT_OK)

    def test_display_text(self):
        cases = [
            ("nil", "nil"),
            ("1 < 2", "true"),
            ('"a" + "b"', "ab"),
            ("10 / 4", "2.5"),
        ]
        for source, expected in cases:
            with self.subTest(source=source):
                self.output = []
                self._run(source)
                self.assertEqual(self.output, [expected])

    def test_runtime_error(self):
        result = self._run("1 / 0")

        self.assertEqual(self.output, ["Division by zero. [line 1]"])
        self.assertIsNotNone(result.runtime_error)
        self.assertIsNone(result.value)
        self.assertEqual(result.exit_code, EXIT_SOFTWARE)

    def test_parse_error(self):
        result = self._run("(1")

        self.assertEqual(self.output, ["Error on line 1: Expect ')' after expression."])
        self.assertIsNotNone(result.parse_error)
        self.assertEqual(result.exit_code, EXIT_DATA_ERROR)

    def test_lexical_errors_are_dropped_from_parser_input(self):
        """Bad characters are reported and the remaining tokens still run."""
        result = self._run("@ 1 + 2")

        self.assertEqual(self.output, [
            "Error on line 1: Invalid token at line 1 pos 0: @",
            "3",
        ])
        self.assertEqual(len(result.lexer_errors), 1)
        self.assertEqual(result.value, NumberLiteral(3.0))
        self.assertEqual(result.exit_code, EXIT_DATA_ERROR)

    def test_lexical_error_then_parse_error(self):
        self._run("1 @ 2")

        self.assertEqual(self.output, [
            "Error on line 1: Invalid token at line 1 pos 2: @",
            "Error on line 1: Expect end of expression.",
        ])

    def test_unterminated_string(self):
        self._run('"abc')

        self.assertEqual(self.output, [
            "Error on line 1: Unterminated string at line 1 pos 0",
            "Error on line 1: Expect expression.",
        ])

    def test_print_ast(self):
        self._run("-123 * (45.67)", print_ast=True)

        self.assertEqual(self.output[0], "(* (- 123) (group 45.67))")
        self.assertEqual(len(self.output), 2)

    def test_long_chain(self):
        source = " + ".join(["1"] * 400)
        result = self._run(source, print_ast=True)

        self.assertEqual(self.output, ["(+ " * 399 + "1" + " 1)" * 399, "400"])
        self.assertEqual(result.value, NumberLiteral(400.0))
        self.assertEqual(result.exit_code, EXIT_OK)

    def test_comma_is_a_runtime_error(self):
        result = self._run("1, 2")

        self.assertEqual(self.output, ["Unexpected operator [line 1]"])
        self.assertEqual(result.exit_code, EXIT_SOFTWARE)

    def test_config_is_applied(self):
        result = self._run('1 < "a"', config=InterpreterConfig(strict_comparisons=True))

        self.assertEqual(self.output, ["Operands must be numbers. [line 1]"])
        self.assertEqual(result.exit_code, EXIT_SOFTWARE)

    def test_unterminated_comment_is_logged(self):
        with self.assertLogs("loxpy.runner", level="WARNING") as logs:
            self._run("1 /* open")

        self.assertEqual(self.output, ["1"])
        self.assertIn("Unterminated block comment", logs.output[0])
        self.assertIn("W001", logs.output[0])


class TestScriptLoading(unittest.TestCase):
    """Test cases for reading script files."""

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmpdir.cleanup)

    def _write(self, name: str, data: bytes) -> str:
        path = os.path.join(self.tmpdir.name, name)
        with open(path, "wb") as f:
            f.write(data)
        return path

    def test_load_source(self):
        path = self._write("ok.lox", '"héllo"'.encode("utf-8"))
        self.assertEqual(load_source(path), '"héllo"')

    def test_missing_file(self):
        with self.assertRaises(ScriptLoadError) as cm:
            load_source(os.path.join(self.tmpdir.name, "missing.lox"))
        self.assertIn("missing.lox", str(cm.exception))

    def test_invalid_utf8(self):
        path = self._write("bad.lox", b"\xff\xfe\xfa")

        with self.assertRaises(ScriptLoadError) as cm:
            load_source(path)
        self.assertEqual(cm.exception.reason, "file is not valid UTF-8")

    def test_directory_is_not_a_script(self):
        with self.assertRaises(ScriptLoadError):
            load_source(self.tmpdir.name)

    def test_run_file(self):
        path = self._write("answer.lox", b"// the answer\n2 * 21\n")
        output = []

        result = run_file(path, echo=output.append)

        self.assertEqual(output, ["42"])
        self.assertEqual(result.exit_code, EXIT_OK)

    def test_run_file_concatenation(self):
        path = self._write("concat.lox", b'"n=" + 4')
        output = []

        result = run_file(path, echo=output.append)

        self.assertEqual(result.value, StringLiteral("n=4"))


if __name__ == "__main__":
    unittest.main()
