"""
Calculator session: the one mutable cell the UI owns.
"""

from typing import Optional

from scoopbook.audit import AuditLogger
from scoopbook.calculator.engine import (
    DEFAULT_MAX_DIGITS,
    ButtonInput,
    CalculatorError,
    CalculatorState,
    DisplayState,
    apply,
)
from scoopbook.calculator.keypad import CalcButton, to_input


class Calculator:
    """
    Holds the current calculator state and feeds presses through `apply`.

    A division by zero is reported to the audit logger; it never raises.
    """

    def __init__(
        self,
        max_digits: int = DEFAULT_MAX_DIGITS,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._max_digits = max_digits
        self._audit_logger = audit_logger
        self._state = CalculatorState()

    @property
    def state(self) -> CalculatorState:
        return self._state

    @property
    def display(self) -> DisplayState:
        return DisplayState.from_state(self._state)

    def apply(self, button: ButtonInput) -> DisplayState:
        """Handle one button press and return what to show."""
        self._state = apply(self._state, button, max_digits=self._max_digits)

        if self._state.error == CalculatorError.DIVISION_BY_ZERO and self._audit_logger:
            self._audit_logger.log_division_by_zero(self._state.accumulator)

        return self.display

    def press(self, label: str) -> DisplayState:
        """Handle a press given by keypad label ("7", "+", "AC", ...)."""
        return self.apply(to_input(CalcButton(label)))

    def reset(self) -> DisplayState:
        """Back to the initial state, including accumulator and pending operation."""
        self._state = CalculatorState()
        return self.display
