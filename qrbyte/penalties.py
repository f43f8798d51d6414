# -*- coding: utf-8 -*-
"""
QR Code Mask Penalty Evaluation Module

This module implements the mask pattern evaluation algorithm according to
ISO/IEC 18004:2015. A finished (masked, format bits drawn) matrix is scored
by four rules N1-N4; the mask with the lowest total penalty is chosen.

Functions:
    penalty_N1: Evaluate adjacent modules in runs (Rule N1)
    penalty_N2: Evaluate 2x2 blocks of same color (Rule N2)
    penalty_N3: Evaluate finder-like patterns (Rule N3)
    penalty_N4: Evaluate dark/light module ratio (Rule N4)
    mask_scores: All four scores as a tuple
    compute_mask_penalty: Calculate total penalty score
"""

from typing import Iterable, List, Tuple

from .matrix import ModuleMatrix


PENALTY_N1 = 3
PENALTY_N2 = 3
PENALTY_N3 = 40
PENALTY_N4 = 10


def _lines(matrix: ModuleMatrix) -> Iterable[List[bool]]:
    """Yield every row, then every column, as a list of module colors."""
    size = matrix.size
    get = matrix.get_module_bounded
    for y in range(size):
        yield [get(x, y) for x in range(size)]
    for x in range(size):
        yield [get(x, y) for y in range(size)]


def penalty_N1(matrix: ModuleMatrix) -> int:
    """
    Calculate penalty for adjacent modules in runs (Rule N1).

    Each horizontal or vertical run of 5 or more modules of the same color
    scores 3 + (run_length - 5).

    Args:
        matrix (ModuleMatrix): Finished QR matrix

    Returns:
        int: Penalty score for rule N1
    """
    score = 0
    for line in _lines(matrix):
        run_color = line[0]
        run = 0
        for color in line:
            if color == run_color:
                run += 1
                if run == 5:
                    score += PENALTY_N1
                elif run > 5:
                    score += 1
            else:
                run_color = color
                run = 1
    return score


def penalty_N2(matrix: ModuleMatrix) -> int:
    """
    Calculate penalty for 2x2 blocks of same color (Rule N2).

    Overlapping blocks count separately; each adds 3 points.
    """
    score = 0
    size = matrix.size
    get = matrix.get_module_bounded
    for y in range(size - 1):
        for x in range(size - 1):
            color = get(x, y)
            if color == get(x + 1, y) and color == get(x, y + 1) and color == get(x + 1, y + 1):
                score += PENALTY_N2
    return score


def _add_history(run_length: int, history: List[int], size: int) -> None:
    # Pushes the run to the front of the history and drops the oldest entry
    if history[0] == 0:
        run_length += size  # Add light border to initial run
    history.insert(0, run_length)
    history.pop()


def _count_patterns(history: List[int]) -> int:
    """
    Count 1:1:3:1:1 patterns ending at the newest light run.

    Can only be called right after a light run is added. Returns 0, 1 or 2:
    one for a light area of 4 units before the pattern, one for after.
    """
    n = history[1]
    core = (n > 0 and history[2] == n and history[3] == n * 3
            and history[4] == n and history[5] == n)
    return (int(core and history[0] >= n * 4 and history[6] >= n)
            + int(core and history[6] >= n * 4 and history[0] >= n))


def _terminate_and_count(run_color: bool, run_length: int, history: List[int], size: int) -> int:
    # Must be called at the end of a line
    if run_color:  # Terminate dark run
        _add_history(run_length, history, size)
        run_length = 0
    run_length += size  # Add light border to final run
    _add_history(run_length, history, size)
    return _count_patterns(history)


def penalty_N3(matrix: ModuleMatrix) -> int:
    """
    Calculate penalty for finder-like patterns (Rule N3).

    Looks for dark:light:dark:light:dark runs in 1:1:3:1:1 proportion
    (any unit width) with a light area at least 4 units wide on one side.
    The area outside the symbol counts as light. Each occurrence adds 40
    points; a pattern with light areas on both sides counts twice.

    Example:
        >>> from qrbyte import make_qr
        >>> penalty_N3(make_qr(b'', ecc='L', mask=0).matrix) >= 3 * 40
        True
    """
    size = matrix.size
    count = 0
    for line in _lines(matrix):
        run_color = False
        run = 0
        history = [0] * 7
        for color in line:
            if color == run_color:
                run += 1
            else:
                _add_history(run, history, size)
                if not run_color:
                    count += _count_patterns(history)
                run_color = color
                run = 1
        count += _terminate_and_count(run_color, run, history, size)
    return count * PENALTY_N3


def penalty_N4(matrix: ModuleMatrix) -> int:
    """
    Calculate penalty for dark/light module ratio (Rule N4).

    10 * k where k is the smallest integer >= 0 such that the dark
    proportion lies within (45 - 5k)% .. (55 + 5k)%.
    """
    size = matrix.size
    total = size * size  # size is odd, so dark/total != 1/2
    dark = sum(row.count(True) for row in matrix.to_rows())
    k = (abs(dark * 20 - total * 10) + total - 1) // total - 1
    return k * PENALTY_N4


def mask_scores(matrix: ModuleMatrix) -> Tuple[int, int, int, int]:
    """Return the penalty scores ``(n1, n2, n3, n4)`` of the matrix."""
    return penalty_N1(matrix), penalty_N2(matrix), penalty_N3(matrix), penalty_N4(matrix)


def compute_mask_penalty(matrix: ModuleMatrix) -> int:
    """
    Calculate total mask penalty score for a QR code matrix.

    Lower scores indicate fewer decoder-hostile structures.

    Args:
        matrix (ModuleMatrix): Finished QR matrix

    Returns:
        int: Total penalty score (lower is better)
    """
    return sum(mask_scores(matrix))
