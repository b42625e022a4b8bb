import logging
from typing import Callable, Optional

from backend.engine import CalculatorEngine
from backend.state import ExpressionBuffer

logger = logging.getLogger(__name__)

ERROR_TEXT = "Error"
CLEAR = "C"
EQUALS = "="

# Keypad layout, top to bottom.
BUTTON_ROWS = [
    ["7", "8", "9", "/"],
    ["4", "5", "6", "*"],
    ["1", "2", "3", "-"],
    ["0", CLEAR, EQUALS, "+"],
]

COMMANDS = frozenset({CLEAR, EQUALS})
TOKENS = frozenset(label for row in BUTTON_ROWS for label in row) - COMMANDS


class CalculatorController:
    """
    Turns button presses into buffer updates and display text.

    Digits and operators are appended to the buffer, "C" clears it and "="
    evaluates it. After a successful "=" the buffer holds the result, so the
    next presses extend it; after a failed one the buffer is empty and the
    display reads "Error".
    """

    def __init__(self, engine: Optional[CalculatorEngine] = None,
                 buffer: Optional[ExpressionBuffer] = None,
                 on_display: Optional[Callable[[str], None]] = None):
        self.engine = engine or CalculatorEngine()
        self.buffer = buffer if buffer is not None else ExpressionBuffer()
        self.on_display = on_display
        self._display = self.buffer.read()

    @property
    def display(self) -> str:
        return self._display

    def _set_display(self, text: str):
        self._display = text
        if self.on_display is not None:
            self.on_display(text)

    def _map_button(self, label: str) -> Optional[Callable[[], None]]:
        """Map a keypad label to the transition it triggers (None if unknown)."""
        if label == CLEAR:
            return self._clear
        if label == EQUALS:
            return self._evaluate
        if label in TOKENS:
            return lambda: self._append(label)
        return None

    def press(self, label: str) -> str:
        """Handle one button press and return the resulting display text."""
        action = self._map_button(label)
        if action is None:
            logger.warning("Ignoring unknown button label %r", label)
            return self._display
        action()
        logger.debug("Pressed %r: buffer=%r display=%r", label, self.buffer.read(), self._display)
        return self._display

    def _append(self, token: str):
        self.buffer.append(token)
        self._set_display(self.buffer.read())

    def _clear(self):
        self.buffer.clear()
        self._set_display("")

    def _evaluate(self):
        result = self.engine.evaluate(self.buffer.read())
        if result.ok:
            self.buffer.replace(result.text)
            self._set_display(result.text)
        else:
            self.buffer.clear()
            self._set_display(ERROR_TEXT)
