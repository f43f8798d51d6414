# -*- coding: utf-8 -*-
"""
QR Encoding Errors Module

Typed failures reported by the encoder. Both subclass ``ValueError`` so
callers that already catch ``ValueError`` around QR generation keep working.

Classes:
    QRError: Base class for every encoder failure
    InvalidParameter: Rejected input (ECC level, mask, version bounds, payload)
    CapacityOverflow: Payload does not fit in any allowed version
"""


class QRError(Exception):
    """Base class for all qrbyte errors."""


class InvalidParameter(QRError, ValueError):
    """An argument is out of range or of the wrong type."""


class CapacityOverflow(QRError, ValueError):
    """
    The payload (plus mode and count header) does not fit.

    Raised (or returned inside an ``EncodeResult``) when no version between
    the encoder's minimum and maximum can hold the data at the requested
    error correction level.
    """

    def __init__(self, data_len: int, ecc, max_version: int):
        self.data_len = data_len
        self.ecc = ecc
        self.max_version = max_version
        super().__init__(
            f"{data_len} bytes do not fit in a version <= {max_version} "
            f"QR Code at error correction level {ecc.name}"
        )
