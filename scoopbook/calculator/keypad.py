"""
Calculator keypad: button labels, layout and colours.

Maps the sixteen on-screen buttons onto calculator inputs.
"""

from enum import Enum

from scoopbook.calculator.engine import (
    ButtonInput,
    Clear,
    Digit,
    Equal,
    Operation,
    Operator,
)


class ButtonRole(str, Enum):
    """Buttons of the same role share a colour."""
    OPERATOR = "operator"
    CLEAR = "clear"
    DIGIT = "digit"


ROLE_COLORS = {
    ButtonRole.OPERATOR: "#0A6E40",
    ButtonRole.CLEAR: "#AAAAAA",
    ButtonRole.DIGIT: "#555555",
}


class CalcButton(str, Enum):
    """A keypad button; the value is the label printed on it."""
    ONE = "1"
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    ZERO = "0"
    ADD = "+"
    SUBTRACT = "–"
    MULTIPLY = "×"
    DIVIDE = "÷"
    EQUAL = "="
    CLEAR = "AC"

    @property
    def role(self) -> ButtonRole:
        if self in _OPERATOR_BUTTONS or self is CalcButton.EQUAL:
            return ButtonRole.OPERATOR
        if self is CalcButton.CLEAR:
            return ButtonRole.CLEAR
        return ButtonRole.DIGIT

    @property
    def color(self) -> str:
        return ROLE_COLORS[self.role]


_OPERATOR_BUTTONS = {
    CalcButton.ADD: Operation.ADD,
    CalcButton.SUBTRACT: Operation.SUBTRACT,
    CalcButton.MULTIPLY: Operation.MULTIPLY,
    CalcButton.DIVIDE: Operation.DIVIDE,
}

# Row by row, top to bottom
KEYPAD_LAYOUT: list[list[CalcButton]] = [
    [CalcButton.ADD, CalcButton.SUBTRACT, CalcButton.MULTIPLY, CalcButton.DIVIDE],
    [CalcButton.SEVEN, CalcButton.EIGHT, CalcButton.NINE, CalcButton.ZERO],
    [CalcButton.FOUR, CalcButton.FIVE, CalcButton.SIX, CalcButton.CLEAR],
    [CalcButton.ONE, CalcButton.TWO, CalcButton.THREE, CalcButton.EQUAL],
]


def to_input(button: CalcButton) -> ButtonInput:
    """Translate a keypad button into the input it represents."""
    if button in _OPERATOR_BUTTONS:
        return Operator(_OPERATOR_BUTTONS[button])
    if button is CalcButton.EQUAL:
        return Equal()
    if button is CalcButton.CLEAR:
        return Clear()
    return Digit(int(button.value))
