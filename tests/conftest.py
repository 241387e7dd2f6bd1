import base64

import pytest

from tokengen_api import create_app

# RFC 4226 / RFC 6238 reference seeds
SEED_SHA1 = b"12345678901234567890"
SEED_SHA256 = b"12345678901234567890123456789012"
SEED_SHA512 = b"1234567890123456789012345678901234567890123456789012345678901234"

DEMO_KEY = "JBSWY3DPEHPK3PXP"
PADDED_KEY = "CI2FM6EQCI2FM6EQKU======"


def b32(raw: bytes) -> str:
    return base64.b32encode(raw).decode("ascii")


@pytest.fixture
def app():
    return create_app({"TESTING": True})


@pytest.fixture
def client(app):
    return app.test_client()
