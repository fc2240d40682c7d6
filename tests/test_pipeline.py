"""End-to-end tests for the run_* entry points."""

import io

from noema import RunResult, run_file, run_source, run_stream
from noema.config import NoemaConfig
from noema.driver import parse
from noema.errors import LexerError, NoemaRuntimeError, ParseError
from noema.runtime import Value, VariableStore


class TestRunSource:
    """Running programs held in strings."""

    def test_success(self):
        out = io.StringIO()
        result = run_source('sonus.dic("ave")\n', output=out)
        assert result == RunResult(ok=True)
        assert bool(result)
        assert out.getvalue() == "ave\n"

    def test_default_path(self):
        result = run_source("sonus.dic(q)\n", output=io.StringIO())
        assert result.message == "<stdin>:1:11: runtime error: undefined variable 'q'"

    def test_configured_default_path(self):
        config = NoemaConfig(default_path="<repl>")
        result = run_source("x = \n", config=config)
        assert result.message.startswith("<repl>:1:5: ")

    def test_failure_is_falsy(self):
        result = run_source("x = 1 / 0\n", "demo.noema")
        assert not result
        assert isinstance(result.error, NoemaRuntimeError)

    def test_error_kinds_by_stage(self):
        assert isinstance(run_source("x = $\n").error, LexerError)
        assert isinstance(run_source("x = \n").error, ParseError)
        assert isinstance(run_source("x = y\n").error, NoemaRuntimeError)

    def test_message_length_limit(self):
        config = NoemaConfig(max_message_length=20)
        result = run_source("x = y\n", "demo.noema", config=config)
        assert result.message == "demo.noema:1:5: runt"


class TestRunStream:
    """Running programs from text streams."""

    def test_stream_input(self):
        out = io.StringIO()
        result = run_stream(io.StringIO("x = 2\nsonus.dic(x * 21)\n"), "s.noema", output=out)
        assert result.ok
        assert out.getvalue() == "42\n"

    def test_caller_store_is_kept(self):
        """Test that a caller-provided store survives the run."""
        store = VariableStore()
        run_stream("x = 3\n", store=store)
        assert store.get("x") == Value.integer(3)

    def test_caller_store_shared_across_runs(self):
        store = VariableStore()
        out = io.StringIO()
        run_stream("x = 3\n", store=store)
        result = run_stream("sonus.dic(x + 1)\n", store=store, output=out)
        assert result.ok
        assert out.getvalue() == "4\n"


class TestRunFile:
    """Running programs from disk."""

    def test_run_file(self, write_source):
        path = write_source(
            """\
            x = 10
            si x > 5:
                sonus.dic("magnus")
            alio:
                sonus.dic("parvus")
            """
        )
        out = io.StringIO()
        result = run_file(path, output=out)
        assert result.ok
        assert out.getvalue() == "magnus\n"

    def test_diagnostic_uses_given_path(self, write_source):
        path = write_source("x = 1 +\n", name="broken.noema")
        result = run_file(path)
        assert result.message.startswith(f"{path}:1:8: parser error: ")

    def test_missing_file(self, tmp_path):
        path = tmp_path / "absent.noema"
        result = run_file(path)
        assert not result.ok
        assert result.message.startswith(f"noema: cannot open '{path}': ")
        assert result.error is None

    def test_crlf_file(self, tmp_path):
        path = tmp_path / "crlf.noema"
        path.write_bytes(b"si verum:\r\n    sonus.dic(1)\r\n")
        out = io.StringIO()
        assert run_file(path, output=out).ok
        assert out.getvalue() == "1\n"


class TestParseOnly:
    """The driver-level parse helper."""

    def test_parse_does_not_execute(self):
        result = parse("sonus.dic(1 / 0)\n")
        assert result.ok
        assert len(result.program) == 1

    def test_parse_uses_config_limits(self):
        result = parse("si a:\n    si b:\n        x = 1\n", config=NoemaConfig(max_indent_depth=2))
        assert result.message == "<stdin>:3:1: lexer error: indent stack overflow"


class TestBundledExample:
    """The example program shipped with the repository."""

    def test_hello_example(self):
        from pathlib import Path

        path = Path(__file__).resolve().parents[1] / "examples" / "hello.noema"
        out = io.StringIO()
        result = run_file(path, output=out)
        assert result.ok, result.message
        assert out.getvalue() == "salve, munde\nmagnus\n3\n-1\n"


class TestFailuresAreResults:
    """Hostile input still ends in a RunResult."""

    def test_deep_parentheses(self):
        result = run_source("sonus.dic(" + "(" * 300 + "1" + ")" * 300 + ")\n")
        assert isinstance(result, RunResult)
        assert result.message == "<stdin>:1:43: parser error: expression nested too deeply"

    def test_deep_prefix_operators(self):
        result = run_source("x = " + "non " * 2000 + "verum\n")
        assert not result.ok
        assert isinstance(result.error, ParseError)

    def test_long_operator_chain(self):
        out = io.StringIO()
        result = run_source("sonus.dic(" + " + ".join(["1"] * 5000) + ")\n", output=out)
        assert result.ok, result.message
        assert out.getvalue() == "5000\n"

    def test_long_short_circuit_chain(self):
        out = io.StringIO()
        result = run_source("sonus.dic(" + " aut ".join(["falsum"] * 3000 + ["1 / 0"]) + ")\n", output=out)
        assert result.message == f"<stdin>:1:{10 + 3000 * 11 + 3}: runtime error: division by zero"

    def test_invalid_utf8_file(self, tmp_path):
        path = tmp_path / "latin1.noema"
        path.write_bytes(b'x = "\xff"\n')
        result = run_file(path)
        assert not result.ok
        assert isinstance(result.error, LexerError)
        assert result.message == f"{path}:1:1: lexer error: invalid UTF-8 in source"

    def test_non_ascii_identifier(self):
        result = run_source("café = 1\nsonus.dic(café)\n")
        assert result.message == "<stdin>:1:4: lexer error: unexpected character 'é'"
