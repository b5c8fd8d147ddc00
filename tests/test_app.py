import os
import sys

import pytest
from fastapi.testclient import TestClient
from limits import parse

# Add the project root to sys.path to resolve module imports correctly
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import config
from config import Config
from encoding import decode_id, encode_id, get_obfuscator
from limiter import limiter
from obfuscation import ConfigurationError, Obfuscator


@pytest.fixture(autouse=True)
def fresh_obfuscator():
    """Each test starts and ends with an obfuscator built from the current config."""
    get_obfuscator.cache_clear()
    yield
    get_obfuscator.cache_clear()


@pytest.fixture
def client():
    """
    Pytest fixture to provide a test client. Using TestClient as a context
    manager runs the application's lifespan (config validation and warm-up).
    """
    from app import app

    limiter.reset()
    with TestClient(app) as test_client:
        yield test_client
    limiter.reset()


# ===================================
# 1. Configuration and Encoding Helpers
# ===================================

def test_encoding_helpers_use_configured_parameters():
    """With no environment overrides the service uses the default parameters."""
    code = encode_id(12345)
    assert code == Obfuscator().encode(12345)
    assert decode_id(code) == 12345


def test_get_obfuscator_is_cached():
    assert get_obfuscator() is get_obfuscator()


def test_configuration_changes_apply_after_cache_clear(monkeypatch):
    """Salt and key must stay below the smaller modulus for codes to decode."""
    monkeypatch.setattr(Config, "OBFUSCATOR_LENGTH", "6")
    monkeypatch.setattr(Config, "OBFUSCATOR_SALT", "13579")
    monkeypatch.setattr(Config, "OBFUSCATOR_KEY", "2468")
    get_obfuscator.cache_clear()
    code = encode_id(42)
    assert len(code) == 6
    assert decode_id(code) == 42


def test_validate_rejects_bad_obfuscator_config(monkeypatch):
    monkeypatch.setattr(Config, "OBFUSCATOR_LENGTH", "1")
    with pytest.raises(ValueError, match="Invalid obfuscator configuration"):
        Config.validate()


def test_validate_rejects_wrong_multiplier_inverse(monkeypatch):
    monkeypatch.setattr(Config, "OBFUSCATOR_MULTIPLIER_INVERSE", "12345")
    with pytest.raises(ValueError):
        Config.validate()
    with pytest.raises(ConfigurationError):
        get_obfuscator()


def test_validate_accepts_defaults():
    Config.validate()


# ===================================
# 2. API Endpoint Tests
# ===================================

def test_health_check(client: TestClient):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "code_length": 11}


def test_encode_endpoint(client: TestClient):
    response = client.get("/api/v1/ids/1/code")
    assert response.status_code == 200
    data = response.json()
    assert data == {"id": 1, "code": Obfuscator().encode(1)}
    assert len(data["code"]) == 11


def test_encode_endpoint_rejects_negative_id(client: TestClient):
    response = client.get("/api/v1/ids/-1/code")
    assert response.status_code == 400
    assert "non-negative" in response.json()["error"]


def test_encode_endpoint_rejects_non_integer_id(client: TestClient):
    response = client.get("/api/v1/ids/abc/code")
    assert response.status_code == 422


def test_decode_endpoint_round_trip(client: TestClient):
    code = client.get("/api/v1/ids/987/code").json()["code"]
    response = client.get(f"/api/v1/codes/{code}/id")
    assert response.status_code == 200
    assert response.json() == {"code": code, "id": 987}


def test_decode_endpoint_accepts_formatted_codes(client: TestClient):
    code = Obfuscator().encode(2024)
    formatted = f"{code[:3]}-{code[3:7]}-{code[7:]}"
    response = client.get(f"/api/v1/codes/{formatted}/id")
    assert response.status_code == 200
    assert response.json()["id"] == 2024


@pytest.mark.parametrize("bad_code", ["abc", "12345", "00000000000"])
def test_decode_endpoint_rejects_invalid_codes(client: TestClient, bad_code):
    response = client.get(f"/api/v1/codes/{bad_code}/id")
    assert response.status_code == 400
    assert response.json()["error"]


def test_batch_encode(client: TestClient):
    response = client.post("/api/v1/codes", json={"ids": [3, 1, 2]})
    assert response.status_code == 200
    codes = response.json()["codes"]
    assert [item["id"] for item in codes] == [3, 1, 2]
    obfuscator = Obfuscator()
    assert all(item["code"] == obfuscator.encode(item["id"]) for item in codes)


def test_batch_encode_rejects_negative_ids(client: TestClient):
    response = client.post("/api/v1/codes", json={"ids": [1, -2]})
    assert response.status_code == 400


def test_batch_encode_validates_payload(client: TestClient):
    assert client.post("/api/v1/codes", json={"ids": []}).status_code == 422
    assert client.post("/api/v1/codes", json={"ids": list(range(101))}).status_code == 422
    assert client.post("/api/v1/codes", json={}).status_code == 422


def test_startup_fails_on_bad_configuration(monkeypatch):
    from app import app

    monkeypatch.setattr(Config, "OBFUSCATOR_MULTIPLIER", "10")
    with pytest.raises(ValueError):
        with TestClient(app):
            pass


def test_decode_endpoint_rejects_code_below_the_salt(client: TestClient):
    """The smallest possible code unsalts to a negative value and is refused."""
    response = client.get(f"/api/v1/codes/{Obfuscator().offset}/id")
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid code"}


def test_decode_endpoint_is_rate_limited(client: TestClient):
    code = Obfuscator().encode(5)
    allowed = parse(config.RATE_LIMIT_DECODE).amount
    for _ in range(allowed):
        assert client.get(f"/api/v1/codes/{code}/id").status_code == 200

    response = client.get(f"/api/v1/codes/{code}/id")
    assert response.status_code == 429
    assert "Rate limit exceeded" in response.json()["error"]
