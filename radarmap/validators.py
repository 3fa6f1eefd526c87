"""Keystroke validators for masked coordinate, bearing and date entry fields.

A field is modelled by :class:`MaskedEdit`: the text shown to the user, in
which positions not yet typed hold the blank character ``_``, and the cursor
position. Each ``validate_*`` function is called after a keystroke and
corrects the field in place: an offending character is blanked again and the
cursor is put back on it. The ``finish_*`` functions are called when editing
ends and fill the remaining blanks.
"""

from __future__ import annotations

from dataclasses import dataclass

BLANK = "_"


@dataclass
class MaskedEdit:
    """The state of a masked line edit: displayed text and cursor position."""

    display_text: str
    cursor: int = 0

    @property
    def text(self) -> str:
        """The entered text, without the mask's blank characters."""
        return self.display_text.replace(BLANK, "")

    def replace_at(self, index: int, char: str) -> None:
        """Replace the character at ``index`` in the displayed text."""
        shown = self.display_text
        self.display_text = shown[:index] + char + shown[index + 1 :]

    def reject_at(self, index: int) -> None:
        """Blank the character at ``index`` and move the cursor onto it."""
        self.replace_at(index, BLANK)
        self.cursor = index


def _in_range(char: str, low: str, high: str) -> bool:
    return low <= char <= high


def _clear_from_first_blank(edit: MaskedEdit, current: int) -> int | None:
    """Blank everything from the first blank before ``current`` up to it.

    Returns the index of that first blank, or ``None`` if there is none.
    """
    index = edit.display_text[:current].find(BLANK)
    if index == -1:
        return None
    for i in range(current - 1, index - 1, -1):
        edit.replace_at(i, BLANK)
    return index


def _fill_blanks(edit: MaskedEdit, index: int, fill: str) -> None:
    """Replace every blank before ``index`` with ``fill``."""
    for i, char in enumerate(edit.display_text[:index]):
        if char == BLANK:
            edit.replace_at(i, fill)


def _fill_leading_gradient_blanks(edit: MaskedEdit, index: int, fill: str) -> None:
    """Fill blanks from position 1 up to ``index``, stopping at the first typed one."""
    for i in range(1, index):
        if edit.display_text[i] != BLANK:
            break
        edit.replace_at(i, fill)


def _check_and_move(edit: MaskedEdit, current: int) -> bool:
    """Clear after an earlier blank; returns True if the cursor was moved."""
    index = _clear_from_first_blank(edit, current)
    if index is None:
        return False
    edit.cursor = index
    return True


def _check_minute_digit(edit: MaskedEdit, current: int, position: int) -> None:
    if _check_and_move(edit, current):
        return
    if not _in_range(edit.display_text[position], "0", "5"):
        edit.reject_at(position)


def validate_latitude(edit: MaskedEdit) -> None:
    """Check a latitude typed as ``A00:00:00.00`` (hemisphere N or S)."""
    current = edit.cursor
    if current == 1:
        if edit.display_text[0].upper() not in ("N", "S"):
            edit.reject_at(0)
        else:
            edit.display_text = edit.display_text.upper()
            edit.cursor = 1
    elif current == 2:
        _check_and_move(edit, current)
        shown = edit.display_text
        if shown[1] == "9" and shown[2] not in ("0", BLANK):
            edit.reject_at(1)
    elif current == 4:
        if _check_and_move(edit, current):
            return
        shown = edit.display_text
        if shown[1] == "9" and shown[2] != "0":
            edit.reject_at(2)
    elif current == 5:
        _check_minute_digit(edit, current, 4)
    elif current == 8:
        _check_minute_digit(edit, current, 7)
    elif current in (7, 10, 11, 12):
        _check_and_move(edit, current)


def validate_lat_lon(edit: MaskedEdit) -> None:
    """Check an unsigned coordinate typed as ``00:00:00.00``."""
    current = edit.cursor
    if current == 1:
        _check_and_move(edit, current)
        shown = edit.display_text
        if shown[1] == "9" and shown[1] != "0" and shown[0] != BLANK:
            edit.reject_at(0)
    elif current == 3:
        if _check_and_move(edit, current):
            return
        shown = edit.display_text
        if shown[0] == "9" and shown[1] != "0":
            edit.reject_at(1)
    elif current == 4:
        _check_minute_digit(edit, current, 3)
    elif current == 7:
        _check_minute_digit(edit, current, 6)
    elif current in (6, 9, 10, 11):
        _check_and_move(edit, current)


def validate_longitude(edit: MaskedEdit) -> None:
    """Check a longitude typed as ``A000:00:00.00`` (hemisphere E or W)."""
    current = edit.cursor
    if current == 1:
        if edit.display_text[0].upper() not in ("E", "W"):
            edit.reject_at(0)
        else:
            edit.display_text = edit.display_text.upper()
            edit.cursor = 1
    elif current == 2:
        if _check_and_move(edit, current):
            return
        if edit.display_text[1] not in ("0", "1"):
            edit.reject_at(1)
    elif current == 3:
        if _check_and_move(edit, current):
            return
        shown = edit.display_text
        if shown[1] == "1" and shown[2] > "7":
            edit.reject_at(2)
    elif current == 6:
        _check_minute_digit(edit, current, 5)
    elif current == 9:
        _check_minute_digit(edit, current, 8)
    elif current in (5, 8, 11, 12, 13):
        _check_and_move(edit, current)


def validate_facility(edit: MaskedEdit) -> None:
    """Limit an unsigned facility value to four characters."""
    data = edit.text
    if data[:1] != "-" and len(data) == 5:
        edit.display_text = data[:4]


def validate_date(edit: MaskedEdit) -> None:
    """Check a date typed as ``00.00.00``."""
    current = edit.cursor
    shown = edit.display_text
    if current == 4:
        if shown[3] not in ("0", "1"):
            edit.reject_at(3)
    elif current == 6:
        if shown[3] != "0" and shown[4] not in ("1", "2"):
            edit.reject_at(4)
    elif current == 7:
        if shown[6] not in ("0", "1", "2", "3"):
            edit.reject_at(6)
    elif current == 8:
        if shown[6] not in ("0", "1", "2") and shown[7] not in ("0", "1"):
            edit.reject_at(7)


def _check_hundreds(edit: MaskedEdit) -> None:
    _fill_blanks(edit, 1, "0")
    if _in_range(edit.display_text[0], "0", "3"):
        edit.cursor = 1
    else:
        edit.reject_at(0)


def _check_units(edit: MaskedEdit) -> None:
    _fill_blanks(edit, 3, "0")
    if _in_range(edit.display_text[2], "0", "9"):
        edit.cursor = 3
    else:
        edit.reject_at(2)


def validate_bearing(edit: MaskedEdit) -> None:
    """Check a bearing typed as ``000.0``, at most 359.9."""
    current = edit.cursor
    if current == 1:
        _check_hundreds(edit)
    elif current == 2:
        _fill_blanks(edit, current, "0")
        shown = edit.display_text
        if shown[0] == "3" and _in_range(shown[1], "0", "5"):
            edit.cursor = 2
        elif shown[0] != "3" and _in_range(shown[1], "0", "9"):
            edit.cursor = 2
        else:
            edit.reject_at(1)
    elif current == 3:
        _check_units(edit)
    elif current == 5:
        _fill_blanks(edit, current, "0")


def validate_bearing_true(edit: MaskedEdit) -> None:
    """Check a whole-degree bearing typed as ``000``."""
    current = edit.cursor
    if current == 1:
        _check_hundreds(edit)
    elif current == 2:
        _fill_blanks(edit, current, "0")
        if _in_range(edit.display_text[1], "0", "5"):
            edit.cursor = 2
        else:
            edit.reject_at(1)
    elif current == 3:
        _check_units(edit)


def finish_bearing(edit: MaskedEdit) -> None:
    """Fill every blank with ``0`` once anything has been entered."""
    if edit.text.replace(".", ""):
        edit.display_text = edit.display_text.replace(BLANK, "0")


def finish_bearing_true(edit: MaskedEdit) -> None:
    """Pad an unmasked bearing with trailing zeros to three digits."""
    data = edit.text
    if data:
        edit.display_text = data + "0" * (3 - len(data))


def _check_sign(edit: MaskedEdit) -> None:
    if edit.display_text[0] in ("+", "-"):
        edit.cursor = 1
    else:
        edit.reject_at(0)


def _signed_fill(edit: MaskedEdit) -> None:
    if len(edit.text) > 2:
        shown = edit.display_text
        sign = shown[0] if shown[0] in ("+", "-") else "+"
        edit.display_text = sign + shown[1:].replace(BLANK, "0")


def validate_gradient(edit: MaskedEdit) -> None:
    """Check a gradient typed as ``(+|-)9.000``."""
    current = edit.cursor
    if current == 1:
        _check_sign(edit)
    elif current == 3:
        _fill_leading_gradient_blanks(edit, current, "0")
        if edit.display_text[1] == "9":
            edit.display_text = edit.display_text[:1] + "9000"
            edit.cursor = 3
    elif current in (4, 5, 6):
        _fill_leading_gradient_blanks(edit, current, "0")
        position = current - 1
        shown = edit.display_text
        if shown[1] == "9" and shown[position] != "0":
            edit.reject_at(position)
        else:
            edit.cursor = current


def finish_gradient(edit: MaskedEdit) -> None:
    """Ensure a sign and fill the remaining blanks of a gradient with ``0``."""
    _signed_fill(edit)


def validate_ellipsoid(edit: MaskedEdit) -> None:
    """Check the sign of an ellipsoid height typed as ``(+|-)0000.0``."""
    if edit.cursor == 1:
        _check_sign(edit)


def finish_ellipsoid(edit: MaskedEdit) -> None:
    """Ensure a sign and fill the remaining blanks of a height with ``0``."""
    _signed_fill(edit)


def finish_dot(edit: MaskedEdit) -> None:
    """Fill every blank with ``0`` once more than one character is entered."""
    if len(edit.text) > 1:
        edit.display_text = edit.display_text.replace(BLANK, "0")


def _digits_only(data: str) -> str:
    return data.replace(":", "").replace(".", "")


def is_latitude(data: str) -> bool:
    """True if ``data`` is empty or a complete ``A00:00:00.00`` latitude."""
    digits = _digits_only(data)
    return not digits.strip() or len(digits) == 9


def is_longitude(data: str) -> bool:
    """True if ``data`` is empty or a complete ``A000:00:00.00`` longitude."""
    digits = _digits_only(data)
    return not digits.strip() or len(digits) == 10