# -*- coding: utf-8 -*-
"""
QR Code Module Matrix

Bit-packed storage for a square grid of modules. The layout is kept
compatible with renderers that read the packed buffer directly:

    byte 0            side length of the grid (0 marks an invalid matrix)
    bytes 1..         one bit per module, row-major; bit ``index & 7`` of
                      byte ``(index >> 3) + 1`` where
                      ``index = y * padded_size + x`` and ``padded_size`` is
                      the side length rounded up to a multiple of 8

Classes:
    ModuleMatrix: Bounds-checked accessors over the packed buffer
"""

from typing import List, Optional

from .errors import InvalidParameter
from .tables import matrix_size


def _padded(size: int) -> int:
    if size & 7:
        return (size & ~7) + 8
    return size


class ModuleMatrix:
    """
    Square grid of dark (True) / light (False) modules.

    The wrapped bytearray is shared, not copied: the encoder owns its scratch
    buffers and hands them to ModuleMatrix views while it works.
    """

    __slots__ = ('buffer',)

    def __init__(self, buffer: bytearray):
        self.buffer = buffer

    @staticmethod
    def buffer_len_for_version(version: int) -> int:
        """Bytes needed to hold a symbol of ``version`` (size byte included)."""
        size = matrix_size(version)
        return (_padded(size) * size + 7) // 8 + 1

    @classmethod
    def for_version(cls, version: int, buffer: Optional[bytearray] = None) -> 'ModuleMatrix':
        """Return an all-light matrix for ``version``, reusing ``buffer`` if given."""
        if buffer is None:
            buffer = bytearray(cls.buffer_len_for_version(version))
        matrix = cls(buffer)
        matrix.reset(matrix_size(version))
        return matrix

    def reset(self, size: int) -> None:
        """Clear the region used by a ``size`` x ``size`` grid and store the size."""
        used = (_padded(size) * size + 7) // 8 + 1
        if used > len(self.buffer):
            raise InvalidParameter(f"Buffer of {len(self.buffer)} bytes too small for size {size}")
        self.buffer[0:used] = bytes(used)
        self.buffer[0] = size

    def invalidate(self) -> None:
        self.buffer[0] = 0

    @property
    def size(self) -> int:
        return self.buffer[0]

    @property
    def padded_size(self) -> int:
        return _padded(self.buffer[0])

    @property
    def is_valid(self) -> bool:
        return self.buffer[0] != 0

    def get_module(self, x: int, y: int) -> bool:
        """
        Return the color of module (x, y): True for dark.

        Coordinates outside the grid read as light.
        """
        size = self.buffer[0]
        return 0 <= x < size and 0 <= y < size and self.get_module_bounded(x, y)

    def get_module_bounded(self, x: int, y: int) -> bool:
        # Coordinates must be in bounds
        index = y * self.padded_size + x
        return (self.buffer[(index >> 3) + 1] >> (index & 7)) & 1 != 0

    def set_module_bounded(self, x: int, y: int, is_dark: bool) -> None:
        # Coordinates must be in bounds
        index = y * self.padded_size + x
        byte_index = (index >> 3) + 1
        if is_dark:
            self.buffer[byte_index] |= 1 << (index & 7)
        else:
            self.buffer[byte_index] &= (1 << (index & 7)) ^ 0xFF

    def set_module_unbounded(self, x: int, y: int, is_dark: bool) -> None:
        """Set module (x, y), doing nothing if it lies outside the grid."""
        size = self.buffer[0]
        if 0 <= x < size and 0 <= y < size:
            self.set_module_bounded(x, y, is_dark)

    def fill_rectangle(self, left: int, top: int, width: int, height: int) -> None:
        """Set every module in [left, left + width) x [top, top + height) to dark."""
        for dy in range(height):
            for dx in range(width):
                self.set_module_bounded(left + dx, top + dy, True)

    def to_rows(self) -> List[List[bool]]:
        """
        Return the grid as a list of rows (``rows[y][x]``), True = dark.

        This is the shape the penalty tools and image writers consume.
        """
        size = self.size
        return [[self.get_module_bounded(x, y) for x in range(size)] for y in range(size)]

    def to_bytes(self) -> bytes:
        """Return the packed layout, trimmed to the bytes the grid uses."""
        size = self.size
        used = (_padded(size) * size + 7) // 8 + 1
        return bytes(self.buffer[:used])

    def copy(self) -> 'ModuleMatrix':
        return ModuleMatrix(bytearray(self.to_bytes()))

    def __eq__(self, other):
        if not isinstance(other, ModuleMatrix):
            return NotImplemented
        return self.to_bytes() == other.to_bytes()

    def __repr__(self):
        return f"ModuleMatrix(size={self.size})"
