"""
Calculator State Machine

A four-function integer calculator expressed as a pure transition:

    apply(state, button) -> new state

The UI holds the single mutable cell (see `scoopbook.calculator.session`);
nothing in this module has side effects.

Observed behaviours that are kept on purpose:
- Clear resets only the display; the accumulator and pending operation survive.
- A second operator before Equal replaces the first without applying it.
- Equal leaves the accumulator and pending operation untouched.
- Text that does not parse as an integer counts as 0 (see `lenient_parse`).

Policies decided here:
- Digit entry stops at `max_digits` digits; extra digit presses are ignored.
- Dividing by zero leaves the state unchanged and sets `error`.
  So does a result longer than `MAX_RESULT_DIGITS` digits.
  The error flag is dropped by the next input.
- Equal pressed again straight after a successful Equal changes nothing.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field


DEFAULT_MAX_DIGITS = 15

# Results must stay convertible to text (CPython caps int-to-str at 4300 digits)
MAX_RESULT_DIGITS = 4000
_RESULT_LIMIT = 10 ** MAX_RESULT_DIGITS

_INTEGER_RE = re.compile(r"[+-]?\d+")


class Operation(str, Enum):
    """Pending operation. NONE is the initial (and reset) state."""
    ADD = "add"
    SUBTRACT = "subtract"
    MULTIPLY = "multiply"
    DIVIDE = "divide"
    EQUAL = "equal"
    NONE = "none"


BINARY_OPERATIONS = frozenset({
    Operation.ADD,
    Operation.SUBTRACT,
    Operation.MULTIPLY,
    Operation.DIVIDE,
})


class CalculatorError(str, Enum):
    DIVISION_BY_ZERO = "division_by_zero"
    RESULT_TOO_LARGE = "result_too_large"


ERROR_MESSAGES = {
    CalculatorError.DIVISION_BY_ZERO: "Cannot divide by zero",
    CalculatorError.RESULT_TOO_LARGE: "Result too large",
}


# =============================================================================
# INPUTS - one button press each
# =============================================================================

@dataclass(frozen=True)
class Digit:
    value: int

    def __post_init__(self) -> None:
        if not isinstance(self.value, int) or not 0 <= self.value <= 9:
            raise ValueError(f"Digit must be an integer 0-9, got {self.value!r}")


@dataclass(frozen=True)
class Operator:
    operation: Operation

    def __post_init__(self) -> None:
        try:
            operation = Operation(self.operation)
        except ValueError:
            operation = None
        if operation not in BINARY_OPERATIONS:
            raise ValueError(
                f"Operator must be one of add/subtract/multiply/divide, got {self.operation!r}"
            )
        object.__setattr__(self, "operation", operation)


@dataclass(frozen=True)
class Equal:
    pass


@dataclass(frozen=True)
class Clear:
    pass


ButtonInput = Union[Digit, Operator, Equal, Clear]


# =============================================================================
# STATE
# =============================================================================

class CalculatorState(BaseModel):
    """
    Everything the calculator remembers between presses.

    `display_value` is always a base-10 integer literal (optionally with a
    leading minus produced by a computation); it is never empty.
    """
    model_config = ConfigDict(frozen=True)

    display_value: str = Field(
        default="0",
        min_length=1,
        description="Number currently shown"
    )
    accumulator: int = Field(
        default=0,
        description="Left operand captured when an operator was pressed"
    )
    pending_operation: Operation = Field(
        default=Operation.NONE,
        description="Operation waiting for Equal"
    )
    error: Optional[CalculatorError] = Field(
        default=None,
        description="Set by the press that failed, cleared by the next press"
    )
    just_evaluated: bool = Field(
        default=False,
        description="True right after a successful Equal"
    )


class DisplayState(BaseModel):
    """What the UI renders after a press."""
    model_config = ConfigDict(frozen=True)

    display_value: str
    message: Optional[str] = None

    @classmethod
    def from_state(cls, state: CalculatorState) -> "DisplayState":
        message = ERROR_MESSAGES.get(state.error) if state.error else None
        return cls(display_value=state.display_value, message=message)


# =============================================================================
# TRANSITIONS
# =============================================================================

def lenient_parse(text: str, default: int = 0) -> int:
    """
    Parse a display string as a base-10 integer.

    Anything that is not a plain integer literal gives `default`.
    """
    if not isinstance(text, str) or not _INTEGER_RE.fullmatch(text.strip()):
        return default
    return int(text)


def truncating_divide(left: int, right: int) -> int:
    """Integer division rounding toward zero (-7 / 2 == -3)."""
    quotient = abs(left) // abs(right)
    return -quotient if (left < 0) != (right < 0) else quotient


def _digit_count(display_value: str) -> int:
    return len(display_value.lstrip("+-"))


def _enter_digit(state: CalculatorState, digit: int, max_digits: int) -> CalculatorState:
    if state.display_value == "0":
        return state.model_copy(update={"display_value": str(digit)})
    if _digit_count(state.display_value) >= max_digits:
        return state
    return state.model_copy(update={"display_value": state.display_value + str(digit)})


def _select_operator(state: CalculatorState, operation: Operation) -> CalculatorState:
    # A pending operation is replaced, never applied
    return state.model_copy(update={
        "accumulator": lenient_parse(state.display_value),
        "pending_operation": operation,
        "display_value": "0",
    })


def _evaluate(state: CalculatorState) -> CalculatorState:
    left = state.accumulator
    right = lenient_parse(state.display_value)
    operation = state.pending_operation

    if operation == Operation.ADD:
        result = left + right
    elif operation == Operation.SUBTRACT:
        result = left - right
    elif operation == Operation.MULTIPLY:
        result = left * right
    elif operation == Operation.DIVIDE:
        if right == 0:
            return state.model_copy(update={"error": CalculatorError.DIVISION_BY_ZERO})
        result = truncating_divide(left, right)
    else:
        return state

    if abs(result) >= _RESULT_LIMIT:
        return state.model_copy(update={"error": CalculatorError.RESULT_TOO_LARGE})

    return state.model_copy(update={"display_value": str(result), "just_evaluated": True})


def apply(
    state: CalculatorState,
    button: ButtonInput,
    *,
    max_digits: int = DEFAULT_MAX_DIGITS,
) -> CalculatorState:
    """
    Compute the state that follows `state` when `button` is pressed.

    Args:
        state: Current calculator state
        button: The button pressed
        max_digits: Longest operand accepted while typing

    Returns:
        The new state. `state` itself is never modified.

    Raises:
        TypeError: If `button` is not a ButtonInput
    """
    repeated_equal = state.just_evaluated
    if state.error is not None or state.just_evaluated:
        state = state.model_copy(update={"error": None, "just_evaluated": False})

    if isinstance(button, Digit):
        return _enter_digit(state, button.value, max_digits)
    if isinstance(button, Operator):
        return _select_operator(state, button.operation)
    if isinstance(button, Equal):
        if repeated_equal:
            return state.model_copy(update={"just_evaluated": True})
        return _evaluate(state)
    if isinstance(button, Clear):
        return state.model_copy(update={"display_value": "0"})

    raise TypeError(f"Unknown calculator input: {button!r}")
