# -*- coding: utf-8 -*-
"""
QR Code Data Mask Module

The eight data mask patterns of ISO/IEC 18004:2015 section 7.8.2, using
(x, y) = (column, row) coordinates and truncating integer arithmetic.

Functions:
    parse_mask: Normalize a user supplied mask selector
    apply_mask: XOR a mask pattern onto the data modules of a matrix
"""

from enum import IntEnum
from typing import Union

from .errors import InvalidParameter
from .matrix import ModuleMatrix


MASK_AUTO = -1


_MASK_FORMULAS = (
    lambda x, y: (x + y) % 2 == 0,
    lambda x, y: y % 2 == 0,
    lambda x, y: x % 3 == 0,
    lambda x, y: (x + y) % 3 == 0,
    lambda x, y: (x // 3 + y // 2) % 2 == 0,
    lambda x, y: x * y % 2 + x * y % 3 == 0,
    lambda x, y: (x * y % 2 + x * y % 3) % 2 == 0,
    lambda x, y: ((x + y) % 2 + x * y % 3) % 2 == 0,
)


class MaskPattern(IntEnum):
    """The eight data mask patterns."""

    CHECKERBOARD = 0
    HORIZONTAL_LINES = 1
    VERTICAL_LINES = 2
    DIAGONAL_LINES = 3
    LARGE_CHECKERBOARD = 4
    FIELDS = 5
    DIAMONDS = 6
    MEADOW = 7

    def inverts(self, x: int, y: int) -> bool:
        """True if the data module at (x, y) is flipped by this pattern."""
        return _MASK_FORMULAS[self](x, y)


def parse_mask(value: Union[int, str, None]) -> int:
    """
    Convert a mask selector into ``MASK_AUTO`` or a pattern number 0..7.

    ``None``, ``'auto'`` and ``MASK_AUTO`` select automatic mask choice;
    ints and digit strings select that pattern.

    Raises:
        InvalidParameter: For anything else
    """
    if value is None or (type(value) is int and value == MASK_AUTO):
        return MASK_AUTO
    if isinstance(value, str):
        text = value.strip().lower()
        if text == 'auto':
            return MASK_AUTO
        if text.isdigit():
            value = int(text)
    if isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= 7:
        return int(value)
    raise InvalidParameter(f"Invalid mask pattern: {value!r}")


def apply_mask(matrix: ModuleMatrix, function_modules: ModuleMatrix, mask: int) -> None:
    """
    XOR the data modules of ``matrix`` with the given mask pattern.

    Function modules (dark in ``function_modules``) are left untouched.
    Applying the same mask twice restores the original matrix, which is how
    trial masks are undone during automatic mask selection.
    """
    if not 0 <= mask <= 7:
        raise InvalidParameter(f"Mask pattern must be in range [0, 7], got {mask!r}")
    inverts = _MASK_FORMULAS[mask]
    size = matrix.size
    for y in range(size):
        for x in range(size):
            if function_modules.get_module_bounded(x, y):
                continue
            if inverts(x, y):
                matrix.set_module_bounded(x, y, not matrix.get_module_bounded(x, y))
