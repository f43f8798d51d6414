# -*- coding: utf-8 -*-
import pytest

from qrbyte import QrEncoder


@pytest.fixture
def hello_payload():
    return b"HELLO"


@pytest.fixture
def encoder():
    return QrEncoder()
