# -*- coding: utf-8 -*-
"""
QR Code Functional Areas Module

Draws the function patterns of a QR code according to ISO/IEC 18004:2015:
finder patterns, timing patterns, alignment patterns, format information
and version information.

Drawing happens in two passes. ``initialize_function_modules`` marks every
function module dark; the resulting matrix doubles as the structural mask
that tells data modules from function modules. ``draw_light_function_modules``
then carves out the light details. Format bits depend on the mask and are
drawn separately by ``draw_format_bits``.

Functions:
    compute_alignment_centers: Calculate alignment pattern center positions
    initialize_function_modules: Mark all function modules dark
    draw_light_function_modules: Draw light details and version information
    draw_format_bits: Draw both copies of the format information
    build_function_mask: Fresh matrix of function modules for a version
"""

from typing import List

from .matrix import ModuleMatrix
from .tables import Ecc, matrix_size


VERSION_INFO_GENERATOR = 0x1F25
FORMAT_INFO_GENERATOR = 0x537
FORMAT_INFO_MASK = 0x5412


def compute_alignment_centers(version: int) -> List[int]:
    """
    Calculate the center positions of alignment patterns for a given QR version.

    Each position is used on both axes. Version 1 has no alignment patterns.

    Args:
        version (int): QR code version (1-40)

    Returns:
        List[int]: Ascending list of center coordinates

    Example:
        >>> compute_alignment_centers(7)
        [6, 22, 38]
        >>> compute_alignment_centers(32)
        [6, 34, 60, 86, 112, 138]
    """
    if version == 1:
        return []

    num_align = version // 7 + 2
    if version == 32:
        step = 26
    else:
        step = (version * 4 + num_align * 2 + 1) // (num_align * 2 - 2) * 2

    # Last position is fixed; the rest are filled backward by step
    result = [0] * num_align
    result[0] = 6
    pos = version * 4 + 10
    for i in range(num_align - 1, 0, -1):
        result[i] = pos
        pos -= step
    return result


def _is_finder_corner(i: int, j: int, num_align: int) -> bool:
    return (i == 0 and j == 0) or (i == 0 and j == num_align - 1) or (i == num_align - 1 and j == 0)


def initialize_function_modules(matrix: ModuleMatrix, version: int) -> None:
    """
    Clear ``matrix`` for the given version and mark every function module dark.

    Args:
        matrix (ModuleMatrix): Matrix whose buffer is large enough for version
        version (int): QR code version (1-40)
    """
    size = matrix_size(version)
    matrix.reset(size)

    # Horizontal and vertical timing patterns
    matrix.fill_rectangle(6, 0, 1, size)
    matrix.fill_rectangle(0, 6, size, 1)

    # 3 finder patterns (all corners except bottom right) and format bits
    matrix.fill_rectangle(0, 0, 9, 9)
    matrix.fill_rectangle(size - 8, 0, 8, 9)
    matrix.fill_rectangle(0, size - 8, 9, 8)

    # Alignment patterns
    centers = compute_alignment_centers(version)
    num_align = len(centers)
    for i in range(num_align):
        for j in range(num_align):
            if not _is_finder_corner(i, j, num_align):
                matrix.fill_rectangle(centers[i] - 2, centers[j] - 2, 5, 5)

    # Version blocks
    if version >= 7:
        matrix.fill_rectangle(size - 11, 0, 3, 6)
        matrix.fill_rectangle(0, size - 11, 6, 3)


def version_info_bits(version: int) -> int:
    """Return the 18-bit version information (version plus BCH remainder)."""
    rem = version
    for _ in range(12):
        rem = (rem << 1) ^ ((rem >> 11) * VERSION_INFO_GENERATOR)
    return version << 12 | rem


def format_info_bits(ecc: Ecc, mask: int) -> int:
    """Return the 15-bit masked format information for ``ecc`` and ``mask``."""
    data = ecc.format_bits << 3 | mask
    rem = data
    for _ in range(10):
        rem = (rem << 1) ^ ((rem >> 9) * FORMAT_INFO_GENERATOR)
    return (data << 10 | rem) ^ FORMAT_INFO_MASK


def draw_light_function_modules(matrix: ModuleMatrix, version: int) -> None:
    """
    Draw light function modules and the version information.

    Requires every function module to be dark already (see
    :func:`initialize_function_modules`): finder and alignment interiors are
    not redrawn. Format bits are not drawn here.
    """
    size = matrix.size

    # Timing patterns
    for i in range(7, size - 7, 2):
        matrix.set_module_bounded(6, i, False)
        matrix.set_module_bounded(i, 6, False)

    # Finder patterns: light rings at Chebyshev distance 2 and 4 (the
    # outer one is the separator, partly outside the grid)
    for dy in range(-4, 5):
        for dx in range(-4, 5):
            dist = max(abs(dx), abs(dy))
            if dist in (2, 4):
                matrix.set_module_unbounded(3 + dx, 3 + dy, False)
                matrix.set_module_unbounded(size - 4 + dx, 3 + dy, False)
                matrix.set_module_unbounded(3 + dx, size - 4 + dy, False)

    # Alignment patterns
    centers = compute_alignment_centers(version)
    num_align = len(centers)
    for i in range(num_align):
        for j in range(num_align):
            if _is_finder_corner(i, j, num_align):
                continue
            for dy in range(-1, 2):
                for dx in range(-1, 2):
                    matrix.set_module_bounded(centers[i] + dx, centers[j] + dy, dx == 0 and dy == 0)

    # Version blocks, two mirrored copies
    if version >= 7:
        bits = version_info_bits(version)
        for i in range(6):
            for j in range(3):
                k = size - 11 + j
                dark = (bits & 1) != 0
                matrix.set_module_bounded(k, i, dark)
                matrix.set_module_bounded(i, k, dark)
                bits >>= 1


def draw_format_bits(matrix: ModuleMatrix, ecc: Ecc, mask: int) -> None:
    """
    Draw two copies of the format bits for ``ecc`` and ``mask``.

    Always overwrites every format module, unlike
    :func:`draw_light_function_modules` which may skip dark ones.
    """
    bits = format_info_bits(ecc, mask)

    def bit(i):
        return (bits >> i) & 1 != 0

    # First copy, around the top left finder
    for i in range(6):
        matrix.set_module_bounded(8, i, bit(i))
    matrix.set_module_bounded(8, 7, bit(6))
    matrix.set_module_bounded(8, 8, bit(7))
    matrix.set_module_bounded(7, 8, bit(8))
    for i in range(9, 15):
        matrix.set_module_bounded(14 - i, 8, bit(i))

    # Second copy, split between top right and bottom left
    size = matrix.size
    for i in range(8):
        matrix.set_module_bounded(size - 1 - i, 8, bit(i))
    for i in range(8, 15):
        matrix.set_module_bounded(8, size - 15 + i, bit(i))
    matrix.set_module_bounded(8, size - 8, True)  # Always dark


def build_function_mask(version: int) -> ModuleMatrix:
    """
    Build a matrix identifying the function modules of a QR version.

    Example:
        >>> mask = build_function_mask(1)
        >>> mask.get_module(0, 0), mask.get_module(10, 10)
        (True, False)
    """
    matrix = ModuleMatrix(bytearray(ModuleMatrix.buffer_len_for_version(version)))
    initialize_function_modules(matrix, version)
    return matrix
