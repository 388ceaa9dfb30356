"""Tests for the command line entry point."""

import pytest

from crisp.__main__ import build_arg_parser, cleanup_old_logs, main


@pytest.fixture
def log_file(tmp_path):
    return str(tmp_path / "crisp.log")


class TestArgParser:
    """Test command line options."""

    def test_defaults(self):
        """With no options the lenient behaviours are on."""
        args = build_arg_parser().parse_args([])

        assert args.files == []
        assert args.max_depth == 250
        assert not args.no_repl
        assert not args.strict_else
        assert not args.strict_calls
        assert not args.strict_substitution
        assert not args.trace
        assert args.log_file is None

    def test_options(self):
        """Every option is parsed."""
        args = build_arg_parser().parse_args([
            "a.crisp", "b.crisp", "--no-repl", "--max-depth", "40",
            "--strict-else", "--strict-calls", "--strict-substitution", "--trace", "--log-file", "x.log"
        ])

        assert args.files == ["a.crisp", "b.crisp"]
        assert args.no_repl
        assert args.max_depth == 40
        assert args.strict_else and args.strict_calls and args.strict_substitution and args.trace
        assert args.log_file == "x.log"


class TestMain:
    """Test running files from the command line."""

    def test_runs_files_in_order(self, tmp_path, log_file, capsys):
        """Files share one environment and results are printed."""
        first = tmp_path / "first.crisp"
        first.write_text("(let (add (lambda (x y) (+ x y))))\n", encoding="utf-8")
        second = tmp_path / "second.crisp"
        second.write_text("; use it\n((add 40) 2)\n", encoding="utf-8")

        assert main([str(first), str(second), "--no-repl", "--log-file", log_file]) == 0
        assert capsys.readouterr().out == "nil\n42\n"

    def test_failure_sets_exit_status(self, tmp_path, log_file, capsys):
        """An error in a file is reported and gives a non-zero status."""
        source = tmp_path / "bad.crisp"
        source.write_text("(if nil 1)\n7\n", encoding="utf-8")

        assert main([str(source), "--no-repl", "--log-file", log_file]) == 1
        assert capsys.readouterr().out == "Error occurred: No branches of predicate ran: nil\n7\n"

    def test_strict_calls_option(self, tmp_path, log_file, capsys):
        """Options reach the evaluator."""
        source = tmp_path / "call.crisp"
        source.write_text("(5 1)\n", encoding="utf-8")

        assert main([str(source), "--no-repl", "--log-file", log_file]) == 0
        assert main([str(source), "--no-repl", "--strict-calls", "--log-file", log_file]) == 1
        assert "Value is not callable" in capsys.readouterr().out

    def test_trace_option(self, tmp_path, log_file, capsys):
        """Tracing prints every reduction step."""
        source = tmp_path / "trace.crisp"
        source.write_text("(if nil 1 2)\n", encoding="utf-8")

        assert main([str(source), "--no-repl", "--trace", "--log-file", log_file]) == 0
        assert capsys.readouterr().out == "(if nil 1 2)\n  nil\n2\n2\n"

    def test_missing_file(self, tmp_path, log_file, capsys):
        """An unreadable file is reported on stderr."""
        assert main([str(tmp_path / "nope.crisp"), "--no-repl", "--log-file", log_file]) == 1
        assert "Cannot read" in capsys.readouterr().err

    def test_interrupt_while_running_file(self, tmp_path, log_file, monkeypatch, capsys):
        """Ctrl-C during a file exits with the interrupt status instead of a traceback."""
        source = tmp_path / "loop.crisp"
        source.write_text("(let (loop (lambda (n) (loop n))))\n(loop 1)\n", encoding="utf-8")

        def interrupted(_self, _source):
            raise KeyboardInterrupt

        monkeypatch.setattr("crisp.__main__.CrispRepl.run_source", interrupted)

        assert main([str(source), "--no-repl", "--log-file", log_file]) == 130
        assert "Interrupted" in capsys.readouterr().err

    def test_no_files_and_no_repl(self, log_file):
        """Nothing to do is a success."""
        assert main(["--no-repl", "--log-file", log_file]) == 0


class TestCleanupOldLogs:
    """Test log rotation housekeeping."""

    def test_keeps_newest_logs(self, tmp_path):
        """Only the allowed number of log files remain."""
        for i in range(5):
            (tmp_path / f"{i}.log").write_text("x", encoding="utf-8")

        cleanup_old_logs(str(tmp_path), max_logs=2)

        assert len(list(tmp_path.glob("*.log"))) == 2
