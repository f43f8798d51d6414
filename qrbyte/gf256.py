# -*- coding: utf-8 -*-
"""
Galois Field GF(2^8) Module

Multiplication in GF(2^8) modulo the QR field polynomial
x^8 + x^4 + x^3 + x^2 + 1 (0x11D). The Reed-Solomon engine receives the
multiply function as a parameter, so hosts can plug in their own primitive.

Functions:
    gf256_multiply: Bitwise (table-free) multiplication
    make_table_multiply: Build an exp/log table based multiplication
"""

from typing import Callable, List, Tuple


Multiply = Callable[[int, int], int]

PRIMITIVE_POLY = 0x11D
GENERATOR = 0x02


def gf256_multiply(x: int, y: int) -> int:
    """
    Return the product of two field elements modulo GF(2^8/0x11D).

    Russian peasant multiplication, reducing as it goes.
    """
    z = 0
    for i in range(7, -1, -1):
        z = (z << 1) ^ ((z >> 7) * PRIMITIVE_POLY)
        z ^= ((y >> i) & 1) * x
    return z


def _build_tables() -> Tuple[List[int], List[int]]:
    # Exp table doubled so exp[log a + log b] never needs a modulo
    exp_table = [0] * 512
    log_table = [0] * 256
    x = 1
    for i in range(255):
        exp_table[i] = x
        exp_table[i + 255] = x
        log_table[x] = i
        x = gf256_multiply(x, GENERATOR)
    return exp_table, log_table


def make_table_multiply() -> Multiply:
    """
    Build a multiplication function backed by exp/log tables.

    Returns the same products as :func:`gf256_multiply` but trades 768
    table entries for fewer operations per call.

    Example:
        >>> multiply = make_table_multiply()
        >>> multiply(0x02, 0x80)
        29
    """
    exp_table, log_table = _build_tables()

    def multiply(x: int, y: int) -> int:
        if x == 0 or y == 0:
            return 0
        return exp_table[log_table[x] + log_table[y]]

    return multiply
