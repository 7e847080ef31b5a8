"""Calculator tool: ``CALL_TOOL <operation> <a> <b>``."""

import logging
import math
import operator
import re
from dataclasses import asdict, dataclass

from .base import TOOL_CALL_TOKEN, Tool, ToolOutcome

logger = logging.getLogger(__name__)

OPERATIONS = {
    "add": operator.add,
    "subtract": operator.sub,
    "multiply": operator.mul,
    "divide": operator.truediv,
}

DIVISION_BY_ZERO = "Division by zero is not allowed."

# Plain decimal literals; float() alone would also take "1_000" and "inf"
NUMBER_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


@dataclass(frozen=True)
class CalculatorArgs:
    operation: str
    a: float
    b: float

    def to_dict(self) -> dict:
        data = asdict(self)
        # Keep integral operands readable in the follow-up message (2, not 2.0)
        for key in ("a", "b"):
            value = data[key]
            if math.isfinite(value) and value.is_integer():
                data[key] = int(value)
        return data


def _parse_number(raw: str) -> float | None:
    if not NUMBER_RE.fullmatch(raw):
        return None
    return float(raw)


class CalculatorTool(Tool[CalculatorArgs]):
    """Performs basic arithmetic on two operands."""

    name = "calculator"
    description = "Performs basic arithmetic operations: add, subtract, multiply, divide"

    def recognize(self, text: str) -> CalculatorArgs | None:
        trimmed = text.strip()
        if not trimmed.upper().startswith(TOOL_CALL_TOKEN):
            return None
        if "\n" in trimmed:
            return None

        tokens = trimmed.split()
        if len(tokens) != 4 or tokens[0].upper() != TOOL_CALL_TOKEN:
            return None

        _, op_raw, a_raw, b_raw = tokens
        operation = op_raw.lower()
        if operation not in OPERATIONS:
            return None

        a = _parse_number(a_raw)
        b = _parse_number(b_raw)
        if a is None or b is None:
            return None

        return CalculatorArgs(operation=operation, a=a, b=b)

    def execute(self, args: CalculatorArgs) -> ToolOutcome:
        func = OPERATIONS.get(args.operation)
        if func is None:
            return ToolOutcome.failure(f"Unsupported calculator operation: {args.operation}")
        if args.operation == "divide" and args.b == 0:
            return ToolOutcome.failure(DIVISION_BY_ZERO)
        try:
            return ToolOutcome.success(func(args.a, args.b))
        except ArithmeticError as e:
            logger.debug(f"Calculator {args.operation} failed: {e}")
            return ToolOutcome.failure(str(e))
