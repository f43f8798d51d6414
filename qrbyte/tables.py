# -*- coding: utf-8 -*-
"""
QR Code Capacity Tables Module

Static per-(version, ECC level) tables and the capacity formulas derived from
them, according to ISO/IEC 18004:2015 Table 9.

Functions:
    matrix_size: Side length of a symbol in modules
    num_raw_data_modules: Data-bearing modules of a version (incl. remainder bits)
    num_data_codewords: Data (non-ECC) codewords for a version and level
    num_char_count_bits: Width of the byte-mode character count field
    check_version: Validate a version number
"""

from enum import IntEnum
from typing import Union

from .errors import InvalidParameter


MIN_VERSION = 1
MAX_VERSION = 40

# Ceiling used by memory-constrained hosts; pass it as ``max_version`` to
# QrEncoder to shrink the scratch buffers.
REDUCED_MAX_VERSION = 27

# Largest per-block ECC length in the table below.
REED_SOLOMON_DEGREE_MAX = 30


class Ecc(IntEnum):
    """Error correction level, ordered by increasing redundancy."""

    LOW = 0       # ~7% recovery
    MEDIUM = 1    # ~15% recovery
    QUARTILE = 2  # ~25% recovery
    HIGH = 3      # ~30% recovery

    @property
    def format_bits(self) -> int:
        """2-bit code stored in the format information."""
        return _FORMAT_BITS[self]

    @classmethod
    def parse(cls, value: Union['Ecc', int, str]) -> 'Ecc':
        """
        Convert user input into an ``Ecc`` member.

        Accepts a member, an int 0..3, a letter ('L', 'M', 'Q', 'H') or a
        level name ('low', 'MEDIUM', ...), case-insensitively.

        Raises:
            InvalidParameter: If the value names no level
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            if 0 <= value <= 3:
                return cls(value)
        elif isinstance(value, str):
            key = value.strip().upper()
            for level in cls:
                if key in (level.name, level.name[0]):
                    return level
        raise InvalidParameter(f"Invalid error correction level: {value!r}")


_FORMAT_BITS = (1, 0, 3, 2)


# Index 0 is padding and set to an illegal value.
ECC_CODEWORDS_PER_BLOCK = (
    # 0,  1,  2,  3,  4,  5,  6,  7,  8,  9, 10, 11, 12, 13, 14, 15, 16, 17, 18, 19, 20, 21, 22, 23, 24, 25, 26, 27, 28, 29, 30, 31, 32, 33, 34, 35, 36, 37, 38, 39, 40
    (-1,  7, 10, 15, 20, 26, 18, 20, 24, 30, 18, 20, 24, 26, 30, 22, 24, 28, 30, 28, 28, 28, 28, 30, 30, 26, 28, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30),  # Low
    (-1, 10, 16, 26, 18, 24, 16, 18, 22, 22, 26, 30, 22, 22, 24, 24, 28, 28, 26, 26, 26, 26, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28, 28),  # Medium
    (-1, 13, 22, 18, 26, 18, 24, 18, 22, 20, 24, 28, 26, 24, 20, 30, 24, 28, 28, 26, 30, 28, 30, 30, 30, 30, 28, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30),  # Quartile
    (-1, 17, 28, 22, 16, 22, 28, 26, 26, 24, 28, 24, 28, 22, 24, 24, 30, 28, 28, 26, 28, 30, 24, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30, 30),  # High
)

NUM_ERROR_CORRECTION_BLOCKS = (
    # 0, 1, 2, 3, 4, 5, 6, 7, 8, 9,10, 11, 12, 13, 14, 15, 16, 17, 18, 19, 20, 21, 22, 23, 24, 25, 26, 27, 28, 29, 30, 31, 32, 33, 34, 35, 36, 37, 38, 39, 40
    (-1, 1, 1, 1, 1, 1, 2, 2, 2, 2, 4,  4,  4,  4,  4,  6,  6,  6,  6,  7,  8,  8,  9,  9, 10, 12, 12, 12, 13, 14, 15, 16, 17, 18, 19, 19, 20, 21, 22, 24, 25),  # Low
    (-1, 1, 1, 1, 2, 2, 4, 4, 4, 5, 5,  5,  8,  9,  9, 10, 10, 11, 13, 14, 16, 17, 17, 18, 20, 21, 23, 25, 26, 28, 29, 31, 33, 35, 37, 38, 40, 43, 45, 47, 49),  # Medium
    (-1, 1, 1, 2, 2, 4, 4, 6, 6, 8, 8,  8, 10, 12, 16, 12, 17, 16, 18, 21, 20, 23, 23, 25, 27, 29, 34, 34, 35, 38, 40, 43, 45, 48, 51, 53, 56, 59, 62, 65, 68),  # Quartile
    (-1, 1, 1, 2, 4, 4, 4, 5, 6, 8, 8, 11, 11, 16, 16, 18, 16, 19, 21, 25, 25, 25, 34, 30, 32, 35, 37, 40, 42, 45, 48, 51, 54, 57, 60, 63, 66, 70, 74, 77, 81),  # High
)


def check_version(version: int) -> int:
    """Return ``version`` unchanged, or raise InvalidParameter if outside 1..40."""
    if isinstance(version, bool) or not isinstance(version, int) \
            or not MIN_VERSION <= version <= MAX_VERSION:
        raise InvalidParameter(
            f"Version must be in range [{MIN_VERSION}, {MAX_VERSION}], got {version!r}")
    return version


def matrix_size(version: int) -> int:
    return version * 4 + 17


def num_raw_data_modules(version: int) -> int:
    """
    Number of data bits a symbol of ``version`` can store once all function
    modules are excluded.

    Includes remainder bits, so the result might not be a multiple of 8.
    The result is in the range [208, 29648].
    """
    result = (16 * version + 128) * version + 64
    if version >= 2:
        num_align = version // 7 + 2
        result -= (25 * num_align - 10) * num_align - 55
        if version >= 7:
            result -= 36
    return result


def num_data_codewords(version: int, ecc: Ecc) -> int:
    """
    Number of 8-bit codewords available for data (not ECC) at the given
    version and error correction level. The result is in the range [9, 2956].
    """
    return (num_raw_data_modules(version) // 8
            - ECC_CODEWORDS_PER_BLOCK[ecc][version]
            * NUM_ERROR_CORRECTION_BLOCKS[ecc][version])


def num_char_count_bits(version: int) -> int:
    """Width of the byte-mode character count indicator."""
    return 8 if version < 10 else 16
