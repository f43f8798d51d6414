# -*- coding: utf-8 -*-
"""
Reed-Solomon Error Correction Module

Generator polynomials, polynomial-division remainders and block interleaving
for QR Code error correction (ISO/IEC 18004:2015 section 7.5 and 7.6).

All polynomials are big endian (highest power first). Generators are stored
without their leading term, which is always 1: x^3 + 255x^2 + 8x + 93 is
stored as ``[255, 8, 93]``.

Functions:
    reed_solomon_compute_divisor: Build a generator polynomial
    reed_solomon_compute_remainder: ECC codewords for one data block
    add_ecc_and_interleave: Split into blocks, add ECC, interleave
"""

from typing import Sequence

from .errors import InvalidParameter
from .gf256 import Multiply, gf256_multiply, GENERATOR
from .tables import (
    Ecc,
    ECC_CODEWORDS_PER_BLOCK,
    NUM_ERROR_CORRECTION_BLOCKS,
    num_data_codewords,
    num_raw_data_modules,
)


def reed_solomon_compute_divisor(degree: int, multiply: Multiply = gf256_multiply) -> bytearray:
    """
    Compute the Reed-Solomon generator polynomial of the given degree.

    The product (x - r^0) * (x - r^1) * ... * (x - r^{degree-1}) with
    r = 0x02, minus its leading 1x^degree term.

    Args:
        degree (int): Number of ECC codewords per block (1..255)
        multiply: GF(256) multiplication primitive

    Returns:
        bytearray: ``degree`` coefficients, highest power first
    """
    if not 1 <= degree <= 255:
        raise InvalidParameter(f"Degree out of range: {degree}")
    result = bytearray(degree)
    result[degree - 1] = 1  # Start off with the monomial x^0

    root = 1
    for _ in range(degree):
        # Multiply the current product by (x - r^i)
        for j in range(degree):
            result[j] = multiply(result[j], root)
            if j + 1 < degree:
                result[j] ^= result[j + 1]
        root = multiply(root, GENERATOR)
    return result


def reed_solomon_compute_remainder(
    data: Sequence[int],
    divisor: Sequence[int],
    multiply: Multiply = gf256_multiply
) -> bytearray:
    """Return the remainder of ``data * x^degree`` divided by ``divisor``."""
    degree = len(divisor)
    result = bytearray(degree)
    for b in data:  # Polynomial division
        factor = b ^ result[0]
        del result[0]
        result.append(0)
        for i in range(degree):
            result[i] ^= multiply(divisor[i], factor)
    return result


def add_ecc_and_interleave(
    data: Sequence[int],
    version: int,
    ecc: Ecc,
    result: bytearray,
    multiply: Multiply = gf256_multiply
) -> int:
    """
    Append ECC to each block of the data codewords and interleave the blocks.

    ``data[0:num_data_codewords(version, ecc)]`` holds the data codewords.
    The first ``num_blocks - raw_codewords % num_blocks`` blocks are short,
    the rest carry one extra data codeword. The final sequence takes one data
    byte from each block in turn (short blocks sit out the last column), then
    one ECC byte from each block in turn.

    Args:
        data: Data codewords (only the first data-codeword count is read)
        version (int): QR code version (1-40)
        ecc (Ecc): Error correction level
        result (bytearray): Output buffer, at least ``raw_codewords`` long
        multiply: GF(256) multiplication primitive

    Returns:
        int: Number of codewords written (``num_raw_data_modules(version) // 8``)
    """
    num_blocks = NUM_ERROR_CORRECTION_BLOCKS[ecc][version]
    block_ecc_len = ECC_CODEWORDS_PER_BLOCK[ecc][version]
    raw_codewords = num_raw_data_modules(version) // 8
    data_len = num_data_codewords(version, ecc)
    num_short_blocks = num_blocks - raw_codewords % num_blocks
    short_block_data_len = raw_codewords // num_blocks - block_ecc_len

    divisor = reed_solomon_compute_divisor(block_ecc_len, multiply)
    offset = 0
    for i in range(num_blocks):
        dat_len = short_block_data_len + (0 if i < num_short_blocks else 1)
        block = data[offset:offset + dat_len]
        block_ecc = reed_solomon_compute_remainder(block, divisor, multiply)

        # Copy data
        k = i
        for j in range(dat_len):
            if j == short_block_data_len:
                k -= num_short_blocks
            result[k] = block[j]
            k += num_blocks

        # Copy ECC
        k = data_len + i
        for j in range(block_ecc_len):
            result[k] = block_ecc[j]
            k += num_blocks
        offset += dat_len
    return raw_codewords
