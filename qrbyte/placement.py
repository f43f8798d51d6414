# -*- coding: utf-8 -*-
"""
QR Code Codeword Placement Module

Places the interleaved codeword stream onto the data modules using the
standard zigzag scan (ISO/IEC 18004:2015 section 7.7.3): two-module wide
columns from right to left, alternately upwards and downwards, skipping the
vertical timing column.

Functions:
    iter_data_modules: Data module coordinates in placement order
    draw_codewords: Write codeword bits into a matrix
"""

from typing import Iterator, Sequence, Tuple

from .matrix import ModuleMatrix


def _zigzag(size: int) -> Iterator[Tuple[int, int]]:
    right = size - 1  # Index of right column in each column pair
    while right >= 1:
        if right == 6:
            right = 5
        upward = ((right + 1) & 2) == 0
        for vert in range(size):
            y = size - 1 - vert if upward else vert
            yield right, y
            yield right - 1, y
        right -= 2


def iter_data_modules(function_modules: ModuleMatrix) -> Iterator[Tuple[int, int]]:
    """
    Yield (x, y) of every non-function module in placement order.

    Args:
        function_modules (ModuleMatrix): Dark at function modules

    Example:
        >>> from qrbyte.functional_areas import build_function_mask
        >>> next(iter_data_modules(build_function_mask(1)))
        (20, 20)
    """
    for x, y in _zigzag(function_modules.size):
        if not function_modules.get_module_bounded(x, y):
            yield x, y


def draw_codewords(matrix: ModuleMatrix, codewords: Sequence[int], num_codewords: int) -> int:
    """
    Draw the raw codewords (data and ECC) onto ``matrix``.

    The matrix must be dark at function modules and light at every other
    module. Bits are placed most significant first. Remainder modules (0 to 7
    of them) are left light.

    Returns:
        int: Number of bits placed
    """
    total_bits = num_codewords * 8
    i = 0
    for x, y in _zigzag(matrix.size):
        if i >= total_bits:
            break
        if not matrix.get_module_bounded(x, y):
            dark = (codewords[i >> 3] >> (7 - (i & 7))) & 1 != 0
            matrix.set_module_bounded(x, y, dark)
            i += 1
    return i
