"""Test program execution: output, control flow and runtime errors."""

import io
import logging
import textwrap

import pytest

from noema.ast import Assign, Literal, LiteralKind, PrintCall, Program, Variable
from noema.errors import NoemaRuntimeError
from noema.runtime import Evaluator, Value, VariableStore


class TestOutput:
    """The print primitive."""

    def test_hello(self, execute):
        result, out = execute('sonus.dic("salve, munde")\n')
        assert result.ok
        assert out == "salve, munde\n"

    @pytest.mark.parametrize(
        "expr,text",
        [
            ("2 + 3 * 4", "14"),
            ("(2 + 3) * 4", "20"),
            ("non verum aut verum", "verum"),
            ("1 < 2 et 2 < 3", "verum"),
            ("1 == verum", "falsum"),
            ('"a" + "b"', "ab"),
            ("nulla", "nulla"),
            ("nulla == nulla", "verum"),
            ('"x" != "y"', "verum"),
            ("-(3 - 10)", "7"),
            ("non 0", "verum"),
            ('non ""', "verum"),
            ("10 >= 10", "verum"),
            ("10 > 10", "falsum"),
            ("9 <= 8", "falsum"),
        ],
    )
    def test_expression_values(self, execute, expr, text):
        result, out = execute(f"sonus.dic({expr})\n")
        assert result.ok, result.message
        assert out == text + "\n"

    @pytest.mark.parametrize(
        "expr,text",
        [
            ("7 / 2", "3"),
            ("-7 / 2", "-3"),
            ("7 / -2", "-3"),
            ("-7 / -2", "3"),
            ("7 % 3", "1"),
            ("-7 % 3", "-1"),
            ("7 % -3", "1"),
        ],
    )
    def test_division_truncates_toward_zero(self, execute, expr, text):
        _, out = execute(f"sonus.dic({expr})\n")
        assert out == text + "\n"

    def test_big_integers(self, execute):
        _, out = execute("sonus.dic(9223372036854775807 + 1)\n")
        assert out == "9223372036854775808\n"

    def test_statements_run_in_order(self, execute):
        _, out = execute(
            """\
            x = 1
            sonus.dic(x)
            x = x + 1
            sonus.dic(x)
            """
        )
        assert out == "1\n2\n"


class TestVariables:
    """Assignment and lookup."""

    def test_reassignment_changes_type(self, execute):
        result, out = execute('x = 5\nx = "hi"\nsonus.dic(x)\n')
        assert result.ok
        assert out == "hi\n"

    def test_import_is_a_no_op(self, execute):
        result, out = execute("import tempus\nsonus.dic(1)\n")
        assert result.ok
        assert out == "1\n"

    def test_undefined_variable(self, execute):
        result, out = execute("sonus.dic(y)\n")
        assert not result.ok
        assert result.message == "test.noema:1:11: runtime error: undefined variable 'y'"
        assert out == ""

    def test_variables_do_not_leak_between_runs(self, execute):
        execute("x = 1\n")
        result, _ = execute("sonus.dic(x)\n")
        assert "undefined variable 'x'" in result.message

    def test_capacity(self, execute):
        """Test the store limit with a small configured capacity."""
        from noema.config import NoemaConfig

        result, _ = execute("a = 1\nb = 2\nc = 3\n", config=NoemaConfig(max_variables=2))
        assert result.message == "test.noema:3:1: runtime error: too many variables"

    def test_capacity_allows_reassignment(self, execute):
        from noema.config import NoemaConfig

        result, out = execute(
            "a = 1\nb = 2\na = 3\nsonus.dic(a)\n", config=NoemaConfig(max_variables=2)
        )
        assert result.ok
        assert out == "3\n"


class TestConditionals:
    """Branch selection."""

    PROGRAM = """\
    si x == 1:
        sonus.dic("unus")
    aliosi x == 2:
        sonus.dic("duo")
    alio:
        sonus.dic("multi")
    """

    @pytest.mark.parametrize("value,text", [(1, "unus"), (2, "duo"), (3, "multi")])
    def test_dispatch(self, execute, value, text):
        _, out = execute(f"x = {value}\n" + textwrap.dedent(self.PROGRAM))
        assert out == text + "\n"

    def test_true_branch(self, execute):
        _, out = execute("x = 1\nsi x == 1:\n    sonus.dic(x)\n")
        assert out == "1\n"

    def test_no_branch_taken(self, execute):
        result, out = execute("x = 2\nsi x == 1:\n    sonus.dic(x)\n")
        assert result.ok
        assert out == ""

    def test_first_true_branch_only(self, execute):
        _, out = execute(
            "si verum:\n    sonus.dic(1)\naliosi verum:\n    sonus.dic(2)\n"
        )
        assert out == "1\n"

    def test_unselected_branch_is_not_evaluated(self, execute):
        """Test that errors in skipped branches never happen."""
        result, out = execute("si falsum:\n    sonus.dic(1 / 0)\nsonus.dic(2)\n")
        assert result.ok
        assert out == "2\n"

    def test_condition_truthiness(self, execute):
        _, out = execute('si "":\n    sonus.dic(1)\nalio:\n    sonus.dic(2)\n')
        assert out == "2\n"

    def test_nested_blocks(self, execute):
        _, out = execute(
            """\
            a = 1
            b = 0
            si a:
                si b:
                    sonus.dic("ab")
                alio:
                    sonus.dic("a")
                sonus.dic("fin")
            """
        )
        assert out == "a\nfin\n"


class TestShortCircuit:
    """'et' and 'aut' skip the right operand when the left decides."""

    def test_and_short_circuits(self, execute):
        result, out = execute("sonus.dic(falsum et 1 / 0)\n")
        assert result.ok
        assert out == "falsum\n"

    def test_or_short_circuits(self, execute):
        result, out = execute("sonus.dic(verum aut 1 / 0)\n")
        assert result.ok
        assert out == "verum\n"

    def test_right_operand_evaluated_when_needed(self, execute):
        result, _ = execute("sonus.dic(verum et 1 / 0)\n")
        assert result.message == "test.noema:1:22: runtime error: division by zero"

    def test_result_is_boolean(self, execute):
        _, out = execute('sonus.dic(1 et "x")\nsonus.dic(0 aut "")\n')
        assert out == "verum\nfalsum\n"


class TestRuntimeErrors:
    """Type and arithmetic errors, located at the operator."""

    @pytest.mark.parametrize(
        "source,message",
        [
            ("x = 1 / 0\n", "1:7: runtime error: division by zero"),
            ("x = 1 % 0\n", "1:7: runtime error: modulo by zero"),
            ('x = 1 + "a"\n', "1:7: runtime error: unsupported operand types for '+': int and string"),
            ("x = verum + 1\n", "1:11: runtime error: unsupported operand types for '+': bool and int"),
            ('x = "a" - "b"\n', "1:9: runtime error: operator '-' requires integer operands"),
            ("x = 2 * nulla\n", "1:7: runtime error: operator '*' requires integer operands"),
            ('x = "a" < "b"\n', "1:9: runtime error: comparison '<' requires integer operands"),
            ('x = -"a"\n', "1:5: runtime error: unary '-' requires integer operand, got string"),
            ("x = -verum\n", "1:5: runtime error: unary '-' requires integer operand, got bool"),
        ],
    )
    def test_messages(self, execute, source, message):
        result, _ = execute(source)
        assert not result.ok
        assert result.message == f"test.noema:{message}"

    def test_error_stops_execution(self, execute):
        """Test that output before the error remains and nothing runs after."""
        result, out = execute("sonus.dic(1)\nsonus.dic(1 / 0)\nsonus.dic(3)\n")
        assert not result.ok
        assert out == "1\n"

    def test_error_inside_block(self, execute):
        result, _ = execute("si verum:\n    x = nulla - 1\n")
        assert result.message == "test.noema:2:15: runtime error: operator '-' requires integer operands"

    def test_parse_error_prevents_execution(self, execute):
        """Test that nothing runs when the program does not parse."""
        result, out = execute("sonus.dic(1)\nx = \n")
        assert not result.ok
        assert "parser error" in result.message
        assert out == ""


class TestEvaluatorDirect:
    """Using the evaluator without the driver."""

    def test_run_program_against_store(self):
        store = VariableStore()
        program = Program(
            [Assign("x", Literal(LiteralKind.INT, 4, line=1, column=5), line=1, column=1)]
        )
        Evaluator(store).run(program)
        assert store.get("x") == Value.integer(4)

    def test_raises_runtime_error(self):
        evaluator = Evaluator(path="direct.noema")
        with pytest.raises(NoemaRuntimeError) as exc_info:
            evaluator.eval(Variable("missing", line=3, column=2))
        assert str(exc_info.value) == "direct.noema:3:2: runtime error: undefined variable 'missing'"

    def test_output_stream(self):
        out = io.StringIO()
        evaluator = Evaluator(output=out)
        evaluator.exec_statement(PrintCall(Literal(LiteralKind.STRING, "ave")))
        assert out.getvalue() == "ave\n"

    def test_trace_logging(self, execute, caplog):
        with caplog.at_level(logging.DEBUG, logger="noema.runtime.evaluator"):
            execute("x = 1\nsonus.dic(x)\n")
        assert "exec assign at 1:1" in caplog.text
        assert "exec printcall at 2:1" in caplog.text
