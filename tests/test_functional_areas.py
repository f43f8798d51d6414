# -*- coding: utf-8 -*-
import pytest

from qrbyte.functional_areas import (
    build_function_mask,
    compute_alignment_centers,
    draw_format_bits,
    draw_light_function_modules,
    format_info_bits,
    initialize_function_modules,
    version_info_bits,
)
from qrbyte.matrix import ModuleMatrix
from qrbyte.tables import Ecc, matrix_size, num_raw_data_modules


@pytest.mark.parametrize("version, expected", [
    (1, []),
    (2, [6, 18]),
    (6, [6, 34]),
    (7, [6, 22, 38]),
    (14, [6, 26, 46, 66]),
    (32, [6, 34, 60, 86, 112, 138]),
    (40, [6, 30, 58, 86, 114, 142, 170]),
])
def test_alignment_centers(version, expected):
    assert compute_alignment_centers(version) == expected


def test_function_module_count_matches_raw_capacity():
    for version in range(1, 41):
        mask = build_function_mask(version)
        size = matrix_size(version)
        function_count = sum(row.count(True) for row in mask.to_rows())
        assert size * size - function_count == num_raw_data_modules(version)


def test_version_info_bits():
    assert version_info_bits(7) == 0x07C94
    assert version_info_bits(40) == 0x28C69


def test_format_info_bits():
    assert format_info_bits(Ecc.LOW, 0) == 0x77C4
    assert format_info_bits(Ecc.MEDIUM, 0) == 0x5412
    values = {format_info_bits(ecc, mask) for ecc in Ecc for mask in range(8)}
    assert len(values) == 32


def test_version_1_function_patterns():
    matrix = ModuleMatrix.for_version(1)
    initialize_function_modules(matrix, 1)
    draw_light_function_modules(matrix, 1)
    get = matrix.get_module
    # Finder: dark outer ring, light ring, dark 3x3 core, light separator
    assert get(0, 0) and get(6, 0) and get(0, 6)
    assert not get(1, 1) and not get(5, 5)
    assert get(2, 2) and get(3, 3) and get(4, 4)
    assert not get(7, 0) and not get(7, 7) and not get(0, 7)
    # Timing pattern
    assert [get(x, 6) for x in range(8, 13)] == [True, False, True, False, True]
    assert [get(6, y) for y in range(8, 13)] == [True, False, True, False, True]
    # Data area untouched
    assert not get(10, 10)


def test_version_info_drawn_from_version_7():
    matrix = ModuleMatrix.for_version(7)
    initialize_function_modules(matrix, 7)
    draw_light_function_modules(matrix, 7)
    size = matrix.size
    bits = version_info_bits(7)
    for i in range(18):
        x, y = size - 11 + i % 3, i // 3
        assert matrix.get_module(x, y) == bool(bits >> i & 1)
        assert matrix.get_module(y, x) == bool(bits >> i & 1)


def test_draw_format_bits_overwrites_and_sets_dark_module():
    matrix = ModuleMatrix.for_version(1)
    initialize_function_modules(matrix, 1)
    draw_light_function_modules(matrix, 1)
    draw_format_bits(matrix, Ecc.MEDIUM, 0)  # 101010000010010
    size = matrix.size
    assert matrix.get_module(8, size - 8)
    bits = 0x5412
    assert [matrix.get_module(8, i) for i in range(6)] == [bool(bits >> i & 1) for i in range(6)]
    assert [matrix.get_module(size - 1 - i, 8) for i in range(8)] == \
        [bool(bits >> i & 1) for i in range(8)]
    # Timing module inside the format row stays dark
    assert matrix.get_module(8, 6)


def test_build_function_mask_is_fresh():
    first = build_function_mask(3)
    second = build_function_mask(3)
    assert first == second
    assert first.buffer is not second.buffer
