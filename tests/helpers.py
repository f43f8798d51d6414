# -*- coding: utf-8 -*-
from qrbyte.functional_areas import version_info_bits, format_info_bits, compute_alignment_centers
from qrbyte.matrix import ModuleMatrix


def sample_payload(length, seed=7):
    """Deterministic, non-trivial byte payload."""
    return bytes((i * 31 + seed) % 256 for i in range(length))


def matrix_from_rows(rows):
    """Build a ModuleMatrix from a list of rows of truthy values."""
    size = len(rows)
    matrix = ModuleMatrix(bytearray((((size + 7) & ~7) * size + 7) // 8 + 1))
    matrix.reset(size)
    for y, row in enumerate(rows):
        for x, value in enumerate(row):
            matrix.set_module_bounded(x, y, bool(value))
    return matrix


def read_format_copies(qr):
    """Return both 15-bit format info copies read back from the symbol."""
    get = qr.get_module
    size = qr.size
    first = 0
    for i in range(6):
        first |= get(8, i) << i
    first |= get(8, 7) << 6
    first |= get(8, 8) << 7
    first |= get(7, 8) << 8
    for i in range(9, 15):
        first |= get(14 - i, 8) << i
    second = 0
    for i in range(8):
        second |= get(size - 1 - i, 8) << i
    for i in range(8, 15):
        second |= get(8, size - 15 + i) << i
    return first, second


def assert_function_patterns(qr):
    """Check every function pattern of a finished symbol against the standard layout."""
    size = qr.size
    version = qr.version
    get = qr.get_module
    assert size == version * 4 + 17

    # Finder patterns plus separators
    for cx, cy in ((3, 3), (size - 4, 3), (3, size - 4)):
        for dy in range(-4, 5):
            for dx in range(-4, 5):
                x, y = cx + dx, cy + dy
                if not (0 <= x < size and 0 <= y < size):
                    continue
                dist = max(abs(dx), abs(dy))
                assert get(x, y) == (dist not in (2, 4)), (x, y)

    # Timing patterns
    for i in range(8, size - 8):
        assert get(i, 6) == (i % 2 == 0)
        assert get(6, i) == (i % 2 == 0)

    # Alignment patterns
    centers = compute_alignment_centers(version)
    n = len(centers)
    for i, ax in enumerate(centers):
        for j, ay in enumerate(centers):
            if (i, j) in ((0, 0), (0, n - 1), (n - 1, 0)):
                continue
            for dy in range(-2, 3):
                for dx in range(-2, 3):
                    dist = max(abs(dx), abs(dy))
                    assert get(ax + dx, ay + dy) == (dist != 1), (ax + dx, ay + dy)

    # Always-dark module
    assert get(8, size - 8)

    # Format information, both copies
    expected = format_info_bits(qr.ecc, qr.mask)
    assert read_format_copies(qr) == (expected, expected)

    # Version information, both copies
    if version >= 7:
        bits = version_info_bits(version)
        for i in range(6):
            for j in range(3):
                k = size - 11 + j
                bit = (bits >> (i * 3 + j)) & 1 != 0
                assert get(k, i) == bit
                assert get(i, k) == bit


