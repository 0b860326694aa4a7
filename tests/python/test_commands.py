"""Unit tests for the command-line interface."""

import io
import json
import logging
import unittest
from contextlib import redirect_stderr, redirect_stdout
from shellexec import executor
from shellexec.commands import VERSION, log_level, main
from shellexec.executor import MockExecutor


class TestCommands(unittest.TestCase):
    """Test CLI subcommands."""

    def setUp(self):
        self.calls = []
        self.result = ("hello\n", 0)

        def callback(command, *args):
            self.calls.append((command, list(args)))
            return self.result

        self.previous = executor.set_default_executor(MockExecutor(callback))

    def tearDown(self):
        executor.set_default_executor(self.previous)

    def run_main(self, *argv):
        """Run the CLI and return its exit code, stdout and stderr."""
        out = io.StringIO()
        err = io.StringIO()
        code = 0
        with redirect_stdout(out), redirect_stderr(err):
            try:
                main(list(argv))
            except SystemExit as e:
                code = e.code
        return code, out.getvalue(), err.getvalue()

    def test_no_arguments_prints_usage(self):
        """Test that running without a command prints usage."""
        code, out, _ = self.run_main()
        self.assertEqual(0, code)
        self.assertIn("Usage: shellexec", out)

    def test_help(self):
        """Test the help command and flag."""
        self.assertIn("Commands:", self.run_main("help")[1])
        self.assertIn("Commands:", self.run_main("--help")[1])

    def test_version(self):
        """Test the version command."""
        code, out, _ = self.run_main("version")
        self.assertEqual(0, code)
        self.assertEqual(VERSION, out.strip())

    def test_split_json(self):
        """Test splitting a line into JSON."""
        code, out, _ = self.run_main("split", "--json", "cmd -d \"a b\" ''")
        self.assertEqual(0, code)
        self.assertEqual({"command": "cmd", "args": ["-d", "a b", ""]}, json.loads(out))

    def test_split_table(self):
        """Test splitting a line into a table."""
        code, out, _ = self.run_main("split", "cmd foo")
        self.assertEqual(0, code)
        self.assertIn("'cmd'", out)
        self.assertIn("'foo'", out)

    def test_split_parse_error(self):
        """Test that malformed lines exit with an error."""
        code, _, err = self.run_main("split", "cmd 'open")
        self.assertEqual(1, code)
        self.assertIn("unexpected end of line", err)

    def test_quote(self):
        """Test assembling a command line."""
        code, out, _ = self.run_main("quote", "newcommand", "foo bar", "", '"""')
        self.assertEqual(0, code)
        self.assertEqual("newcommand foo\\ bar \"\" '\"\"\"'\n", out)

    def test_quote_command_named_like_subcommand(self):
        """Test that the quoted command name does not clash with subcommands."""
        code, out, _ = self.run_main("quote", "split", "a b")
        self.assertEqual(0, code)
        self.assertEqual("split a\\ b\n", out)
        code, out, _ = self.run_main("quote", "foo")
        self.assertEqual("foo\n", out)

    def test_log_level_choices(self):
        """Test that only logging level names are accepted."""
        code, _, err = self.run_main("--log-level", "basic_format", "version")
        self.assertEqual(2, code)
        self.assertIn("invalid choice", err)
        code, out, _ = self.run_main("--log-level", "debug", "version")
        self.assertEqual(0, code)
        self.assertEqual(VERSION, out.strip())

    def test_log_level_names(self):
        """Test mapping level names, including unknown environment values."""
        self.assertEqual(logging.DEBUG, log_level("debug"))
        self.assertEqual(logging.ERROR, log_level("ERROR"))
        self.assertEqual(logging.WARNING, log_level("basic_format"))

    def test_run_unknown_encoding(self):
        """Test that an unknown --encoding is rejected before running."""
        code, _, err = self.run_main("run", "--encoding", "no-such-codec", "echo hi")
        self.assertEqual(2, code)
        self.assertIn("unknown encoding", err)
        self.assertEqual([], self.calls)

    def test_run(self):
        """Test running a line through the default executor."""
        code, out, _ = self.run_main("run", "echo 'hello world'")
        self.assertEqual(0, code)
        self.assertEqual("hello\n", out)
        self.assertEqual([("echo", ["hello world"])], self.calls)

    def test_run_exit_code(self):
        """Test that the child's exit code is passed through."""
        self.result = ("oops\n", 3)
        code, out, _ = self.run_main("run", "false")
        self.assertEqual(3, code)
        self.assertEqual("oops\n", out)

    def test_run_check(self):
        """Test that --check reports non-zero exit codes as errors."""
        self.result = ("oops\n", 3)
        code, _, err = self.run_main("run", "--check", "false")
        self.assertEqual(1, code)
        self.assertIn("process returned with code 3", err)

    def test_run_parse_error(self):
        """Test that parse errors do not reach the executor."""
        code, _, err = self.run_main("run", "echo \"open")
        self.assertEqual(2, code)
        self.assertIn("unexpected end of line", err)
        self.assertEqual([], self.calls)


if __name__ == "__main__":
    unittest.main()
