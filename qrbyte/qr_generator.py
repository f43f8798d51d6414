# -*- coding: utf-8 -*-
"""
QR Code Generator Module

Entry points for encoding a byte payload into a QR Code symbol. The whole
pipeline runs inside one ``QrEncoder`` call: version selection, data
codewords, Reed-Solomon ECC and interleaving, function patterns, codeword
placement, masking and format bits.

Classes:
    QrCode: A finished symbol (version, level, mask and packed matrix)
    EncodeResult: Either a QrCode or the typed error that prevented it
    QrEncoder: Encode context owning scratch buffers sized for a max version

Functions:
    encode: One-shot encode returning an EncodeResult
    make_qr: Generate a QR code, raising on failure
    evaluate_all_masks: Score every mask pattern to find the optimal one
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple, Union

from .bitstream import DataLayout, plan_layout, write_data_codewords
from .errors import CapacityOverflow, InvalidParameter, QRError
from .functional_areas import (
    draw_format_bits,
    draw_light_function_modules,
    initialize_function_modules,
)
from .gf256 import Multiply, gf256_multiply
from .masks import MASK_AUTO, apply_mask, parse_mask
from .matrix import ModuleMatrix
from .penalties import compute_mask_penalty
from .placement import draw_codewords
from .reed_solomon import add_ecc_and_interleave
from .tables import MAX_VERSION, MIN_VERSION, Ecc, check_version

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QrCode:
    """A finished QR Code symbol."""

    version: int
    ecc: Ecc
    mask: int
    matrix: ModuleMatrix

    @property
    def size(self) -> int:
        return self.matrix.size

    def get_module(self, x: int, y: int) -> bool:
        """Color of module (x, y), True for dark; light outside the symbol."""
        return self.matrix.get_module(x, y)

    def to_rows(self) -> List[List[bool]]:
        return self.matrix.to_rows()

    def to_bytes(self) -> bytes:
        return self.matrix.to_bytes()


@dataclass(frozen=True)
class EncodeResult:
    """
    Outcome of an encode call: exactly one of ``qr`` and ``error`` is set.

    Example:
        >>> result = encode(b'HELLO', ecc='L')
        >>> result.ok, result.qr.version
        (True, 1)
    """

    qr: Optional[QrCode] = None
    error: Optional[QRError] = None

    def __post_init__(self):
        if (self.qr is None) == (self.error is None):
            raise ValueError("EncodeResult needs exactly one of qr and error")

    @property
    def ok(self) -> bool:
        return self.qr is not None

    def unwrap(self) -> QrCode:
        """Return the QR code, or raise the error that prevented it."""
        if self.error is not None:
            raise self.error
        return self.qr


class QrEncoder:
    """
    Encode context for byte-mode QR codes.

    Owns two scratch buffers sized for ``max_version``: one for the symbol
    under construction and one that first holds the interleaved codewords
    and then the function-module mask. An encoder must not be shared between
    concurrent encodes; create one per thread.

    Args:
        min_version (int): Smallest version to consider (default 1)
        max_version (int): Largest version to consider (default 40); lower it
            to shrink the buffers
        multiply: GF(256) multiplication primitive used for Reed-Solomon
    """

    def __init__(
        self,
        min_version: int = MIN_VERSION,
        max_version: int = MAX_VERSION,
        multiply: Multiply = gf256_multiply
    ):
        check_version(min_version)
        check_version(max_version)
        if min_version > max_version:
            raise InvalidParameter(
                f"min_version ({min_version}) is greater than max_version ({max_version})")
        self.min_version = min_version
        self.max_version = max_version
        self.multiply = multiply
        buffer_len = ModuleMatrix.buffer_len_for_version(max_version)
        self._qrcode = bytearray(buffer_len)
        self._temp = bytearray(buffer_len)

    def encode(
        self,
        payload: Union[bytes, bytearray],
        ecc: Union[Ecc, int, str] = Ecc.MEDIUM,
        boost_error: bool = False,
        mask: Union[int, str, None] = MASK_AUTO
    ) -> EncodeResult:
        """
        Encode ``payload`` as a single byte-mode segment.

        Args:
            payload (bytes): The data to encode
            ecc: Minimum error correction level ('L', 'M', 'Q', 'H' or Ecc)
            boost_error (bool): Raise the level while the version stays the same
            mask: 'auto' / None / MASK_AUTO to pick the lowest penalty, or 0-7

        Returns:
            EncodeResult: The QR code, or InvalidParameter / CapacityOverflow
        """
        try:
            ecc = Ecc.parse(ecc)
            mask = parse_mask(mask)
            if not isinstance(payload, (bytes, bytearray, memoryview)):
                raise InvalidParameter(
                    f"Payload must be bytes, got {type(payload).__name__}")
        except InvalidParameter as ex:
            return EncodeResult(error=ex)
        payload = bytes(payload)

        layout = plan_layout(len(payload), ecc, boost_error, self.min_version, self.max_version)
        if layout is None:
            self._qrcode[0] = 0  # Invalid size marks the work buffer as unusable
            logger.warning(f"Payload of {len(payload)} bytes does not fit in version "
                           f"<= {self.max_version} at level {ecc.name}")
            return EncodeResult(error=CapacityOverflow(len(payload), ecc, self.max_version))
        logger.debug(f"Selected version {layout.version}, level {layout.ecc.name} "
                     f"({layout.bit_length} data bits)")

        qrcode = self._draw_symbol(payload, layout)
        function_modules = ModuleMatrix(self._temp)
        initialize_function_modules(function_modules, layout.version)

        if mask == MASK_AUTO:
            mask = self._choose_mask(qrcode, function_modules, layout.ecc)
        apply_mask(qrcode, function_modules, mask)  # Apply the final choice of mask
        draw_format_bits(qrcode, layout.ecc, mask)  # Overwrite old format bits

        return EncodeResult(qr=QrCode(layout.version, layout.ecc, mask, qrcode.copy()))

    def _draw_symbol(self, payload: bytes, layout: DataLayout) -> ModuleMatrix:
        """Build the unmasked symbol in the work buffer."""
        write_data_codewords(payload, layout, self._qrcode)
        num_codewords = add_ecc_and_interleave(
            self._qrcode, layout.version, layout.ecc, self._temp, self.multiply)

        qrcode = ModuleMatrix(self._qrcode)
        initialize_function_modules(qrcode, layout.version)
        draw_codewords(qrcode, self._temp, num_codewords)
        draw_light_function_modules(qrcode, layout.version)
        return qrcode

    def _choose_mask(self, qrcode: ModuleMatrix, function_modules: ModuleMatrix, ecc: Ecc) -> int:
        best_mask = 0
        min_penalty = None
        for candidate in range(8):
            apply_mask(qrcode, function_modules, candidate)
            draw_format_bits(qrcode, ecc, candidate)
            penalty = compute_mask_penalty(qrcode)
            if min_penalty is None or penalty < min_penalty:
                best_mask = candidate
                min_penalty = penalty
            apply_mask(qrcode, function_modules, candidate)  # Undoes the mask due to XOR
        logger.debug(f"Best mask: {best_mask} (score: {min_penalty})")
        return best_mask


def encode(
    payload: Union[bytes, bytearray],
    ecc: Union[Ecc, int, str] = 'M',
    boost_error: bool = False,
    mask: Union[int, str, None] = 'auto',
    min_version: int = MIN_VERSION,
    max_version: int = MAX_VERSION
) -> EncodeResult:
    """
    Encode ``payload`` with a fresh encoder and return the result.

    Invalid version bounds are reported in the result as well.
    """
    try:
        encoder = QrEncoder(min_version, max_version)
    except InvalidParameter as ex:
        return EncodeResult(error=ex)
    return encoder.encode(payload, ecc=ecc, boost_error=boost_error, mask=mask)


def make_qr(
    data: Union[str, bytes, bytearray],
    ecc: Union[Ecc, int, str] = 'M',
    version: Optional[Union[int, str]] = None,
    encoding: str = 'utf-8',
    mask: Union[int, str, None] = 'auto',
    boost_error: bool = False,
    max_version: int = MAX_VERSION
) -> QrCode:
    """
    Generate a QR code symbol with specified parameters.

    Args:
        data (Union[str, bytes]): The data to encode; text is encoded with
            ``encoding`` and stored in byte mode
        ecc (str): Error correction level ('L', 'M', 'Q', 'H')
            - L: ~7% recovery capability
            - M: ~15% recovery capability
            - Q: ~25% recovery capability
            - H: ~30% recovery capability
        version (Optional[Union[int, str]]): QR code version (1-40) or 'auto'
            - 'auto' / None: Select minimum version that fits the data
            - int: Force specific version (1=21x21, 40=177x177)
        encoding (str): Character encoding for text data
        mask (Union[str, int]): Mask pattern
            - 'auto': Calculate optimal mask using the penalty rules
            - int: Use specific mask pattern (0-7)
        boost_error (bool): Automatically increase ECC level if space allows
        max_version (int): Largest version considered when version is 'auto'

    Returns:
        QrCode: Generated QR code

    Raises:
        InvalidParameter: If parameters are invalid
        CapacityOverflow: If data doesn't fit in the allowed versions

    Example:
        >>> qr = make_qr("https://example.com", ecc='M', mask='auto')
        >>> qr.version, qr.size
        (2, 25)
    """
    if isinstance(data, str):
        data = data.encode(encoding)
    if version in (None, 'auto'):
        min_version = MIN_VERSION
    else:
        try:
            min_version = max_version = int(version)
        except (TypeError, ValueError):
            raise InvalidParameter(f"Invalid version: {version!r}") from None
    return encode(data, ecc=ecc, boost_error=boost_error, mask=mask,
                  min_version=min_version, max_version=max_version).unwrap()


def evaluate_all_masks(
    data: Union[str, bytes, bytearray],
    ecc: Union[Ecc, int, str] = 'M',
    version: Optional[Union[int, str]] = None,
    encoding: str = 'utf-8',
    boost_error: bool = False
) -> Tuple[int, int, Dict[int, int]]:
    """
    Evaluate all mask patterns (0-7) to find the optimal one.

    Generates the symbol with every mask pattern and calculates its penalty
    score. The mask with the lowest penalty (first one on ties) is the one
    ``mask='auto'`` picks.

    Returns:
        Tuple[int, int, Dict[int, int]]: (best_mask, best_score, all_scores)
            - best_mask: Mask pattern with lowest penalty (0-7)
            - best_score: Penalty score of the best mask
            - all_scores: Dictionary mapping mask -> penalty score

    Example:
        >>> best_mask, best_score, scores = evaluate_all_masks("Hello World", ecc='M')
        >>> best_mask == make_qr("Hello World", ecc='M').mask
        True
    """
    scores = {}
    best_mask = None
    best_score = None

    for mask_pattern in range(8):
        symbol = make_qr(data, ecc=ecc, version=version, encoding=encoding,
                         mask=mask_pattern, boost_error=boost_error)
        penalty_score = compute_mask_penalty(symbol.matrix)
        scores[mask_pattern] = penalty_score

        if best_score is None or penalty_score < best_score:
            best_score = penalty_score
            best_mask = mask_pattern

    return best_mask, best_score, scores
