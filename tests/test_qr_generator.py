# -*- coding: utf-8 -*-
import logging

import pytest
import qrcode
from qrcode import constants
from qrcode.util import MODE_8BIT_BYTE, QRData

from qrbyte import (
    CapacityOverflow,
    Ecc,
    EncodeResult,
    InvalidParameter,
    MAX_VERSION,
    MaskPattern,
    QrEncoder,
    REDUCED_MAX_VERSION,
    build_function_mask,
    compute_mask_penalty,
    encode,
    evaluate_all_masks,
    make_qr,
    make_table_multiply,
)
from qrbyte.placement import iter_data_modules
from qrbyte.tables import num_data_codewords

from helpers import assert_function_patterns, sample_payload


def _reference_rows(payload, qr):
    reference = qrcode.QRCode(
        version=qr.version,
        error_correction=getattr(constants, "ERROR_CORRECT_" + qr.ecc.name[0]),
        border=0,
        mask_pattern=qr.mask,
    )
    reference.add_data(QRData(payload, mode=MODE_8BIT_BYTE))
    reference.make(fit=False)
    return [[bool(module) for module in row] for row in reference.get_matrix()]


def test_hello_low(hello_payload):
    qr = make_qr(hello_payload, ecc='L')
    assert (qr.version, qr.size, qr.ecc) == (1, 21, Ecc.LOW)
    pattern = MaskPattern(qr.mask)
    bits = []
    for x, y in iter_data_modules(build_function_mask(1)):
        bits.append(int(qr.get_module(x, y) ^ pattern.inverts(x, y)))
        if len(bits) == 12:
            break
    # Byte mode indicator, then a count of 5
    assert bits == [0, 1, 0, 0, 0, 0, 0, 0, 0, 1, 0, 1]


def test_auto_mask_matches_fixed_mask(hello_payload):
    auto = make_qr(hello_payload, ecc='L')
    fixed = make_qr(hello_payload, ecc='L', mask=auto.mask)
    assert auto.to_bytes() == fixed.to_bytes()


@pytest.mark.parametrize("payload", [b"HELLO", b"https://example.com", sample_payload(90)])
def test_auto_mask_has_lowest_penalty(payload):
    best_mask, best_score, scores = evaluate_all_masks(payload, ecc='Q')
    qr = make_qr(payload, ecc='Q')
    assert qr.mask == best_mask
    assert best_score == min(scores.values())
    assert compute_mask_penalty(qr.matrix) == best_score
    # Ties go to the lowest mask number
    assert all(scores[m] > best_score for m in range(best_mask))


@pytest.mark.parametrize("length", [1, 5, 17, 40, 100, 255, 500, 1000])
@pytest.mark.parametrize("ecc", ['L', 'M', 'Q', 'H'])
def test_matches_reference_encoder(length, ecc):
    payload = sample_payload(length, seed=length)
    mask = (length + 'LMQH'.index(ecc)) % 8
    qr = make_qr(payload, ecc=ecc, mask=mask)
    assert qr.to_rows() == _reference_rows(payload, qr)


@pytest.mark.parametrize("mask", range(8))
def test_every_mask_matches_reference_encoder(hello_payload, mask):
    qr = make_qr(hello_payload, ecc='L', mask=mask)
    assert qr.to_rows() == _reference_rows(hello_payload, qr)


@pytest.mark.parametrize("version", [1, 2, 6, 7, 13, 27, 40])
def test_forced_version_matches_reference_encoder(version):
    payload = sample_payload(30)
    qr = make_qr(payload, ecc='M', version=version, mask=version % 8)
    assert qr.version == version
    assert qr.to_rows() == _reference_rows(payload, qr)


@pytest.mark.parametrize("ecc", list(Ecc))
def test_function_patterns_every_version(ecc):
    for version in range(1, MAX_VERSION + 1):
        qr = make_qr(b"", ecc=ecc, version=version, mask=version % 8)
        assert_function_patterns(qr)


def test_empty_payload():
    result = encode(b"", ecc='L')
    assert result.ok
    assert result.qr.version == 1
    assert_function_patterns(result.qr)


def test_count_field_width_decides_version():
    assert make_qr(sample_payload(255), ecc='L').version == 10
    result = encode(sample_payload(256), ecc='L', max_version=9)
    assert not result.ok
    assert isinstance(result.error, CapacityOverflow)


def test_overflow_invalidates_work_buffer():
    encoder = QrEncoder(max_version=9)
    assert encoder.encode(b"HELLO").ok
    result = encoder.encode(sample_payload(400), ecc='H')
    assert isinstance(result.error, CapacityOverflow)
    assert encoder._qrcode[0] == 0


def test_overflow_raises_from_make_qr():
    with pytest.raises(CapacityOverflow) as info:
        make_qr(sample_payload(3000), ecc='L')
    assert isinstance(info.value, ValueError)
    assert "3000 bytes" in str(info.value)


def test_overflow_logs_warning(caplog):
    caplog.set_level(logging.WARNING, logger="qrbyte.qr_generator")
    encode(sample_payload(100), ecc='H', max_version=2)
    assert any("does not fit" in record.getMessage() for record in caplog.records)


def test_reduced_max_version():
    capacity = num_data_codewords(REDUCED_MAX_VERSION, Ecc.LOW)
    fits = encode(sample_payload(capacity - 3), ecc='L', max_version=REDUCED_MAX_VERSION)
    assert fits.qr.version == REDUCED_MAX_VERSION
    too_big = encode(sample_payload(capacity - 2), ecc='L', max_version=REDUCED_MAX_VERSION)
    assert isinstance(too_big.error, CapacityOverflow)
    assert encode(sample_payload(capacity - 2), ecc='L').qr.version == REDUCED_MAX_VERSION + 1


def test_min_version():
    assert encode(b"HELLO", min_version=5).qr.version == 5


@pytest.mark.parametrize("kwargs", [
    {'ecc': 'Z'},
    {'ecc': 7},
    {'mask': 8},
    {'mask': 'best'},
    {'min_version': 5, 'max_version': 3},
    {'max_version': 41},
])
def test_invalid_parameters_are_results(kwargs):
    result = encode(b"HELLO", **kwargs)
    assert not result.ok
    assert isinstance(result.error, InvalidParameter)
    with pytest.raises(InvalidParameter):
        result.unwrap()


def test_text_payload_rejected_by_encode():
    result = encode("HELLO")
    assert isinstance(result.error, InvalidParameter)


def test_encoder_rejects_bad_bounds():
    with pytest.raises(InvalidParameter):
        QrEncoder(max_version=0)
    with pytest.raises(InvalidParameter):
        QrEncoder(min_version=10, max_version=9)


def test_make_qr_bad_version():
    with pytest.raises(InvalidParameter):
        make_qr(b"HELLO", version='big')


def test_make_qr_text_uses_encoding():
    text = "héllo wörld"
    assert make_qr(text, ecc='Q').to_bytes() == make_qr(text.encode('utf-8'), ecc='Q').to_bytes()
    assert make_qr(text, encoding='latin-1').to_bytes() == \
        make_qr(text.encode('latin-1')).to_bytes()


def test_boost_error(hello_payload):
    qr = encode(hello_payload, ecc='L', boost_error=True).unwrap()
    assert (qr.version, qr.ecc) == (1, Ecc.HIGH)
    for length in (10, 50, 120, 400):
        payload = sample_payload(length)
        plain = encode(payload, ecc='L').unwrap()
        boosted = encode(payload, ecc='L', boost_error=True).unwrap()
        assert boosted.version == plain.version
        assert boosted.ecc >= plain.ecc


def test_encoder_reuse_matches_fresh_encode():
    encoder = QrEncoder()
    large = encoder.encode(sample_payload(2000), ecc='L').unwrap()
    snapshot = large.to_bytes()
    small = encoder.encode(b"HELLO", ecc='L').unwrap()
    assert small.matrix == encode(b"HELLO", ecc='L').qr.matrix
    # Results own their matrix
    assert large.to_bytes() == snapshot


def test_table_multiply_gives_same_symbol():
    payload = sample_payload(200)
    bitwise = QrEncoder().encode(payload, ecc='H').unwrap()
    table = QrEncoder(multiply=make_table_multiply()).encode(payload, ecc='H').unwrap()
    assert bitwise.matrix == table.matrix


def test_encode_result_needs_exactly_one_field():
    with pytest.raises(ValueError):
        EncodeResult()
    qr = make_qr(b"HELLO")
    with pytest.raises(ValueError):
        EncodeResult(qr=qr, error=InvalidParameter("bad"))
    assert EncodeResult(qr=qr).unwrap() is qr
