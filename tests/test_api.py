from tokengen_api import create_app

from conftest import DEMO_KEY, PADDED_KEY, SEED_SHA1, b32


def test_index(client):
    response = client.get("/")
    assert response.status_code == 200
    assert "POST /token" in response.get_json()["endpoints"]


def test_algorithms(client):
    data = client.get("/algorithms").get_json()
    assert len(data["algorithms"]) == 9
    assert data["defaults"] == {"algorithm": "SHA-1", "period": 30, "digits": 6}


def test_token(client):
    response = client.post("/token", json={"key": DEMO_KEY, "timestamp": 1675324259})
    assert response.status_code == 200
    assert response.get_json() == {
        "token": "680081",
        "algorithm": "SHA-1",
        "period": 30,
        "digits": 6,
        "counter": 55844141,
        "remaining": 1,
    }


def test_token_iso_timestamp(client):
    response = client.post("/token", json={"key": DEMO_KEY, "timestamp": "2023-02-02T07:46:03.119Z"})
    assert response.get_json()["token"] == "338417"


def test_token_options(client):
    body = {"key": "CI2FM6EQCI2FM6EQKU", "period": 60, "digits": 8, "timestamp": 1675325104}
    assert client.post("/token", json=body).get_json()["token"] == "30348533"

    body = {"key": DEMO_KEY, "algorithm": "SHA-512", "timestamp": 1465324707000}
    assert client.post("/token", json=body).get_json()["token"] == "093730"


def test_token_without_timestamp_uses_now(client):
    data = client.post("/token", json={"key": DEMO_KEY}).get_json()
    assert len(data["token"]) <= 6
    assert 1 <= data["remaining"] <= 30


def test_token_errors(client):
    cases = [
        ({"key": "", "timestamp": 1675324259}, "EmptyKeyError"),
        ({"key": "1", "timestamp": 1675324259}, "InvalidKeyError"),
        ({"key": DEMO_KEY, "timestamp": 14653247070000}, "InvalidTimestampError"),
        ({"key": DEMO_KEY, "timestamp": "not a date"}, "InvalidTimestampError"),
        ({"key": DEMO_KEY, "timestamp": "--5"}, "InvalidTimestampError"),
        ({"key": DEMO_KEY, "timestamp": "\u00b2"}, "InvalidTimestampError"),
        ({"key": DEMO_KEY, "algorithm": "MD5"}, "InvalidConfigError"),
        ({"key": DEMO_KEY, "period": -1}, "InvalidConfigError"),
        ({"key": DEMO_KEY, "window": 2}, "InvalidConfigError"),
    ]
    for body, error_type in cases:
        response = client.post("/token", json=body)
        assert response.status_code == 400
        assert response.get_json()["type"] == error_type


def test_token_requires_json_object(client):
    response = client.post("/token", data="key=JBSWY3DPEHPK3PXP")
    assert response.status_code == 400
    assert response.get_json()["type"] == "BadRequest"

    response = client.post("/token", json=["JBSWY3DPEHPK3PXP"])
    assert response.status_code == 400

    response = client.post("/token", json={"timestamp": 1675324259})
    assert response.get_json()["error"] == "key is required"


def test_hotp(client):
    response = client.post("/hotp", json={"key": b32(SEED_SHA1), "counter": 1})
    assert response.status_code == 200
    assert response.get_json() == {"token": "287082", "counter": 1}


def test_hotp_errors(client):
    for counter in (-1, "1", None, 2 ** 64):
        response = client.post("/hotp", json={"key": b32(SEED_SHA1), "counter": counter})
        assert response.status_code == 400
    response = client.post("/hotp", json={"key": "1", "counter": 1})
    assert response.get_json()["type"] == "InvalidKeyError"


def test_defaults_from_environment(monkeypatch):
    monkeypatch.setenv("TOKENGEN_TOTP_PERIOD", "60")
    client = create_app({"TESTING": True}).test_client()
    response = client.post("/token", json={"key": PADDED_KEY, "timestamp": 1675325019})
    assert response.get_json()["period"] == 60
    assert response.get_json()["token"] == "762533"


def test_defaults_from_test_config():
    client = create_app({"TESTING": True, "TOTP_DIGITS": 8}).test_client()
    body = {"key": "CI2FM6EQCI2FM6EQKU", "period": 60, "timestamp": 1675325104}
    assert client.post("/token", json=body).get_json()["token"] == "30348533"


def test_cors_header(client):
    response = client.get("/algorithms", headers={"Origin": "http://example.com"})
    assert response.headers["Access-Control-Allow-Origin"] == "*"
