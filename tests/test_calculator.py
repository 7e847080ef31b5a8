import pytest

from tool_chat.tools.calculator import CalculatorArgs, CalculatorTool, DIVISION_BY_ZERO


@pytest.fixture
def calculator():
    return CalculatorTool()


class TestRecognize:

    def test_basic_call(self, calculator):
        assert calculator.recognize("CALL_TOOL add 2 2") == CalculatorArgs("add", 2.0, 2.0)

    def test_token_and_operation_are_case_insensitive(self, calculator):
        assert calculator.recognize("call_tool MULTIPLY 3 4") == CalculatorArgs("multiply", 3.0, 4.0)

    def test_surrounding_whitespace_is_ignored(self, calculator):
        assert calculator.recognize("   CALL_TOOL   subtract  10\t4  \n") == CalculatorArgs("subtract", 10.0, 4.0)

    def test_decimal_negative_and_exponent_operands(self, calculator):
        args = calculator.recognize("CALL_TOOL divide -7.5 2e1")
        assert args == CalculatorArgs("divide", -7.5, 20.0)

    def test_leading_and_trailing_dot_operands(self, calculator):
        assert calculator.recognize("CALL_TOOL add .5 3.") == CalculatorArgs("add", 0.5, 3.0)

    @pytest.mark.parametrize("text", [
        "CALL_TOOL multiply x 3",
        "CALL_TOOL add 2 two",
        "CALL_TOOL add nan 1",
        "CALL_TOOL add inf 1",
        "CALL_TOOL add 1 -Infinity",
        "CALL_TOOL add 1_000 2",
        "CALL_TOOL add \u0663 1",
        "CALL_TOOL add 0x10 1",
    ])
    def test_non_numeric_operand_is_no_match(self, calculator, text):
        assert calculator.recognize(text) is None

    @pytest.mark.parametrize("text", [
        "CALL_TOOL add 2",
        "CALL_TOOL add 2 2 2",
        "CALL_TOOL",
        "CALL_TOOL add 2\n2",
    ])
    def test_wrong_token_count_is_no_match(self, calculator, text):
        assert calculator.recognize(text) is None

    @pytest.mark.parametrize("text", [
        "The answer is CALL_TOOL add 2 2",
        "Sure! 2 + 2 = 4",
        "CALL_TOOLS add 2 2",
        "",
    ])
    def test_text_not_starting_with_token_is_no_match(self, calculator, text):
        assert calculator.recognize(text) is None

    def test_unknown_operation_is_no_match(self, calculator):
        assert calculator.recognize("CALL_TOOL power 2 8") is None


class TestExecute:

    @pytest.mark.parametrize("operation,a,b,expected", [
        ("add", 2, 2, 4),
        ("subtract", 2, 5, -3),
        ("multiply", 1.5, 4, 6),
        ("divide", 9, 2, 4.5),
    ])
    def test_operations(self, calculator, operation, a, b, expected):
        outcome = calculator.execute(CalculatorArgs(operation, float(a), float(b)))
        assert outcome.ok is True
        assert outcome.value == expected
        assert outcome.error is None

    def test_divide_by_zero(self, calculator):
        outcome = calculator.execute(CalculatorArgs("divide", 5.0, 0.0))
        assert outcome.ok is False
        assert outcome.error == DIVISION_BY_ZERO == "Division by zero is not allowed."

    def test_divide_by_negative_zero(self, calculator):
        outcome = calculator.execute(CalculatorArgs("divide", 5.0, -0.0))
        assert outcome.error == DIVISION_BY_ZERO

    def test_overflow_follows_float_semantics(self, calculator):
        outcome = calculator.execute(CalculatorArgs("multiply", 1e308, 10.0))
        assert outcome.ok is True
        assert outcome.value == float("inf")

    def test_unsupported_operation_returns_failure(self, calculator):
        outcome = calculator.execute(CalculatorArgs("modulo", 5.0, 2.0))
        assert outcome.ok is False
        assert "Unsupported calculator operation" in outcome.error


def test_args_to_dict_keeps_integral_operands_as_ints():
    assert CalculatorArgs("add", 2.0, 2.5).to_dict() == {"operation": "add", "a": 2, "b": 2.5}
