"""Fixed-length one-time-code entry."""

import re
from typing import List

CODE_LENGTH = 6

_NON_DIGITS = re.compile(r"[^0-9]")


def _digits_only(raw: str) -> str:
    return _NON_DIGITS.sub("", raw or "")


class OtpInput:
    """Six single-digit cells plus the index of the cell that should hold focus."""

    def __init__(self, length: int = CODE_LENGTH):
        self.length = length
        self.cells: List[str] = [""] * length
        self.focus = 0

    def set_digit(self, index: int, raw_value: str) -> None:
        digits = _digits_only(raw_value)
        if not digits:
            self.cells[index] = ""
            return
        # Autofill can deliver several characters at once; only the first one stays.
        self.cells[index] = digits[0]
        if index < self.length - 1:
            self.focus = index + 1

    def handle_backspace(self, index: int) -> None:
        if not self.cells[index] and index > 0:
            self.focus = index - 1

    def paste(self, raw_text: str) -> None:
        digits = _digits_only(raw_text)[: self.length]
        if not digits:
            return
        for i, digit in enumerate(digits):
            self.cells[i] = digit
        self.focus = len(digits) - 1

    def reset(self) -> None:
        self.cells = [""] * self.length
        self.focus = 0

    def is_complete(self) -> bool:
        return all(len(cell) == 1 and cell in "0123456789" for cell in self.cells)

    def joined(self) -> str:
        return "".join(self.cells)
