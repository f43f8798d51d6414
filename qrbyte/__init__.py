# -*- coding: utf-8 -*-
"""
qrbyte - Core Module

This package encodes a byte payload into a QR Code symbol (single byte-mode
segment), producing a bit-packed module matrix.

Modules:
    qr_generator: Encode entry points and mask evaluation
    bitstream: Data codeword construction and version selection
    reed_solomon: Error correction codewords and block interleaving
    gf256: GF(2^8) multiplication primitives
    tables: Capacity tables and formulas
    matrix: Bit-packed module matrix
    functional_areas: QR code function pattern drawing
    placement: Zigzag codeword placement
    masks: Data mask patterns
    penalties: Mask pattern evaluation algorithms
    errors: Typed encoder errors
"""

__version__ = "1.0.0"
__author__ = "qrbyte developers"

from .errors import QRError, InvalidParameter, CapacityOverflow
from .tables import Ecc, MIN_VERSION, MAX_VERSION, REDUCED_MAX_VERSION
from .matrix import ModuleMatrix
from .masks import MASK_AUTO, MaskPattern
from .gf256 import gf256_multiply, make_table_multiply
from .qr_generator import QrCode, EncodeResult, QrEncoder, encode, make_qr, evaluate_all_masks
from .functional_areas import build_function_mask, compute_alignment_centers
from .penalties import compute_mask_penalty

__all__ = [
    'QRError',
    'InvalidParameter',
    'CapacityOverflow',
    'Ecc',
    'MIN_VERSION',
    'MAX_VERSION',
    'REDUCED_MAX_VERSION',
    'ModuleMatrix',
    'MASK_AUTO',
    'MaskPattern',
    'gf256_multiply',
    'make_table_multiply',
    'QrCode',
    'EncodeResult',
    'QrEncoder',
    'encode',
    'make_qr',
    'evaluate_all_masks',
    'build_function_mask',
    'compute_alignment_centers',
    'compute_mask_penalty',
]
