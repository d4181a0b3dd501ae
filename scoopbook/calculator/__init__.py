"""Calculator package."""

from scoopbook.calculator.engine import (
    BINARY_OPERATIONS,
    DEFAULT_MAX_DIGITS,
    MAX_RESULT_DIGITS,
    ButtonInput,
    CalculatorError,
    CalculatorState,
    Clear,
    Digit,
    DisplayState,
    Equal,
    Operation,
    Operator,
    apply,
    lenient_parse,
    truncating_divide,
)
from scoopbook.calculator.keypad import (
    KEYPAD_LAYOUT,
    ButtonRole,
    CalcButton,
    to_input,
)
from scoopbook.calculator.session import Calculator

__all__ = [
    "BINARY_OPERATIONS",
    "DEFAULT_MAX_DIGITS",
    "MAX_RESULT_DIGITS",
    "ButtonInput",
    "CalculatorError",
    "CalculatorState",
    "Clear",
    "Digit",
    "DisplayState",
    "Equal",
    "Operation",
    "Operator",
    "apply",
    "lenient_parse",
    "truncating_divide",
    "KEYPAD_LAYOUT",
    "ButtonRole",
    "CalcButton",
    "to_input",
    "Calculator",
]
