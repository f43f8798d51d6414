# -*- coding: utf-8 -*-
"""
QR Code Bit Stream Encoder Module

Builds the data codeword sequence for a single byte-mode segment:
mode indicator, character count, payload, terminator, bit padding and pad
codewords (ISO/IEC 18004:2015 section 7.4).

Functions:
    get_total_bits: Bits used by a byte-mode segment at a given version
    plan_layout: Pick the smallest fitting version and (optionally) boost ECC
    write_data_codewords: Emit the padded data codewords into a buffer
"""

from dataclasses import dataclass
from typing import Optional, Sequence

from .errors import InvalidParameter
from .tables import Ecc, num_char_count_bits, num_data_codewords


BYTE_MODE_INDICATOR = 0x4
PAD_CODEWORDS = (0xEC, 0x11)


class BitBuffer:
    """Appends bits, most significant first, into a caller-owned bytearray."""

    __slots__ = ('buffer', 'bit_length')

    def __init__(self, buffer: bytearray, bit_length: int = 0):
        self.buffer = buffer
        self.bit_length = bit_length

    def append_bits(self, value: int, num_bits: int) -> None:
        """Append the ``num_bits`` low-order bits of ``value``."""
        if not 0 <= num_bits <= 16 or value >> num_bits != 0:
            raise InvalidParameter(f"Value {value} does not fit in {num_bits} bits")
        for i in range(num_bits - 1, -1, -1):
            self.buffer[self.bit_length >> 3] |= ((value >> i) & 1) << (7 - (self.bit_length & 7))
            self.bit_length += 1


@dataclass(frozen=True)
class DataLayout:
    """Version and level chosen for a payload, plus its segment length in bits."""

    version: int
    ecc: Ecc
    bit_length: int

    @property
    def capacity_bits(self) -> int:
        return num_data_codewords(self.version, self.ecc) * 8


def get_total_bits(version: int, data_len: int) -> Optional[int]:
    """
    Return the number of bits a byte segment of ``data_len`` bytes needs.

    Returns ``None`` if the length does not fit in the character count
    field of ``version`` (256 bytes or more with an 8-bit field).
    """
    cc_bits = num_char_count_bits(version)
    if data_len >= 1 << cc_bits:
        return None
    return 4 + cc_bits + data_len * 8


def plan_layout(
    data_len: int,
    ecc: Ecc,
    boost_error: bool,
    min_version: int,
    max_version: int
) -> Optional[DataLayout]:
    """
    Find the smallest version in [min_version, max_version] that holds the data.

    If ``boost_error`` is set, the level is then raised (MEDIUM, QUARTILE,
    HIGH in turn) as long as the data still fits in the chosen version.
    Boosting never lowers the level nor changes the version.

    Returns:
        Optional[DataLayout]: The layout, or None if no version fits
    """
    for version in range(min_version, max_version + 1):
        used_bits = get_total_bits(version, data_len)
        if used_bits is not None and used_bits <= num_data_codewords(version, ecc) * 8:
            break
    else:
        return None

    if boost_error:
        for level in (Ecc.MEDIUM, Ecc.QUARTILE, Ecc.HIGH):
            if used_bits <= num_data_codewords(version, level) * 8:
                ecc = Ecc(max(ecc, level))
    return DataLayout(version, ecc, used_bits)


def write_data_codewords(payload: Sequence[int], layout: DataLayout, buffer: bytearray) -> int:
    """
    Write the data codewords for ``payload`` into ``buffer``.

    Args:
        payload: The bytes to encode
        layout (DataLayout): Result of :func:`plan_layout` for this payload
        buffer (bytearray): Output, at least ``num_data_codewords`` long

    Returns:
        int: Number of data codewords written
    """
    capacity_bits = layout.capacity_bits
    buffer[0:capacity_bits // 8] = bytes(capacity_bits // 8)
    bb = BitBuffer(buffer)

    bb.append_bits(BYTE_MODE_INDICATOR, 4)
    bb.append_bits(len(payload), num_char_count_bits(layout.version))
    for b in payload:
        bb.append_bits(b, 8)

    # Terminator, then pad up to a byte boundary
    bb.append_bits(0, min(4, capacity_bits - bb.bit_length))
    bb.append_bits(0, (8 - bb.bit_length % 8) % 8)

    # Pad with alternating bytes until data capacity is reached
    pad_index = 0
    while bb.bit_length < capacity_bits:
        bb.append_bits(PAD_CODEWORDS[pad_index], 8)
        pad_index ^= 1
    return bb.bit_length // 8
