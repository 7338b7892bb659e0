import pytest
from jose import JWTError

from common.jwt import create_nonce_token, verify_nonce_token, verify_token


def test_access_token_roundtrip(access_token):
    claims = verify_token(access_token("17"), expected_token_type="access")
    assert claims["sub"] == "17"


def test_access_token_type_is_enforced(access_token):
    with pytest.raises(JWTError):
        verify_token(access_token("17", token_type="refresh"), expected_token_type="access")


def test_nonce_is_not_an_access_token():
    with pytest.raises(JWTError):
        verify_token(create_nonce_token(17))


def test_access_token_is_not_a_nonce(access_token):
    assert verify_nonce_token(access_token("17")) is False


def test_nonce_is_bound_to_its_action():
    token = create_nonce_token(17, action="goal_updates")
    assert verify_nonce_token(token, action="goal_updates") is True
    assert verify_nonce_token(token, action="something_else") is False


def test_nonce_verification_never_raises():
    assert verify_nonce_token(None) is False
    assert verify_nonce_token("") is False
    assert verify_nonce_token("a.b.c") is False
    assert verify_nonce_token(create_nonce_token(17, expires_minutes=-1)) is False
