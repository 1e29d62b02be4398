from __future__ import annotations

import jwt
import pytest

from coursehub.errors import TokenError, TokenRejected
from coursehub.security.tokens import Identity, TokenCodec

SECRET = "unit-secret-0123456789abcdef0123456789abcdef"
ISSUER = "coursehub.test"
ISSUED_AT = 1_700_000_000
TTL = 600


@pytest.fixture()
def fixed_codec() -> TokenCodec:
    return TokenCodec(SECRET, ttl_seconds=TTL, issuer=ISSUER, clock=lambda: ISSUED_AT)


def _tamper_signature(token: str) -> str:
    header, payload, signature = token.split(".")
    index = len(signature) // 2
    replacement = "A" if signature[index] != "A" else "B"
    return ".".join([header, payload, signature[:index] + replacement + signature[index + 1:]])


def test_issue_embeds_subject_user_id_and_expiry(fixed_codec):
    token = fixed_codec.issue("t@x.com", "user-1")
    claims = jwt.decode(token, SECRET, algorithms=["HS256"], options={"verify_exp": False})

    assert claims["sub"] == "t@x.com"
    assert claims["userId"] == "user-1"
    assert claims["iat"] == ISSUED_AT
    assert claims["exp"] == ISSUED_AT + TTL
    assert claims["iss"] == ISSUER


def test_authenticate_round_trip_recovers_identity(fixed_codec):
    token = fixed_codec.issue("t@x.com", "user-1")

    identity = fixed_codec.authenticate(token, now=ISSUED_AT + 1)

    assert identity == Identity(email="t@x.com", user_id="user-1", expires_at=ISSUED_AT + TTL)


@pytest.mark.parametrize("offset", [0, 1, TTL - 1])
def test_authenticate_accepts_before_expiry(fixed_codec, offset):
    token = fixed_codec.issue("t@x.com", "user-1")
    assert fixed_codec.authenticate(token, now=ISSUED_AT + offset).user_id == "user-1"


@pytest.mark.parametrize("offset", [TTL, TTL + 1, TTL * 10])
def test_authenticate_rejects_at_and_after_expiry(fixed_codec, offset):
    token = fixed_codec.issue("t@x.com", "user-1")
    with pytest.raises(TokenRejected) as excinfo:
        fixed_codec.authenticate(token, now=ISSUED_AT + offset)
    assert excinfo.value.reason is TokenError.EXPIRED


def test_authenticate_uses_injected_clock_by_default():
    now = [ISSUED_AT]
    codec = TokenCodec(SECRET, ttl_seconds=TTL, issuer=ISSUER, clock=lambda: now[0])
    token = codec.issue("t@x.com", "user-1")

    assert codec.authenticate(token).email == "t@x.com"
    now[0] = ISSUED_AT + TTL
    with pytest.raises(TokenRejected):
        codec.authenticate(token)


def test_tampered_signature_is_rejected(fixed_codec):
    token = _tamper_signature(fixed_codec.issue("t@x.com", "user-1"))
    with pytest.raises(TokenRejected) as excinfo:
        fixed_codec.authenticate(token, now=ISSUED_AT)
    assert excinfo.value.reason in {TokenError.BAD_SIGNATURE, TokenError.MALFORMED}


def test_token_signed_with_other_secret_is_rejected(fixed_codec):
    forger = TokenCodec("another-secret-0123456789abcdef0123456789", ttl_seconds=TTL, issuer=ISSUER)
    with pytest.raises(TokenRejected) as excinfo:
        fixed_codec.authenticate(forger.issue("t@x.com", "user-1"), now=ISSUED_AT)
    assert excinfo.value.reason is TokenError.BAD_SIGNATURE


def test_token_from_other_issuer_is_rejected(fixed_codec):
    other = TokenCodec(SECRET, ttl_seconds=TTL, issuer="someone.else", clock=lambda: ISSUED_AT)
    with pytest.raises(TokenRejected) as excinfo:
        fixed_codec.authenticate(other.issue("t@x.com", "user-1"), now=ISSUED_AT)
    assert excinfo.value.reason is TokenError.MALFORMED


@pytest.mark.parametrize("token", ["", "garbage", "a.b.c", "not.a.jwt.at.all"])
def test_malformed_tokens_are_rejected(fixed_codec, token):
    with pytest.raises(TokenRejected) as excinfo:
        fixed_codec.authenticate(token, now=ISSUED_AT)
    assert excinfo.value.reason is TokenError.MALFORMED


def test_token_without_user_id_is_rejected(fixed_codec):
    token = jwt.encode(
        {"iss": ISSUER, "sub": "t@x.com", "iat": ISSUED_AT, "exp": ISSUED_AT + TTL},
        SECRET,
        algorithm="HS256",
    )
    with pytest.raises(TokenRejected) as excinfo:
        fixed_codec.authenticate(token, now=ISSUED_AT)
    assert excinfo.value.reason is TokenError.MISSING_CLAIMS


def test_unsigned_token_is_rejected(fixed_codec):
    token = jwt.encode(
        {"iss": ISSUER, "sub": "t@x.com", "userId": "u", "iat": ISSUED_AT, "exp": ISSUED_AT + TTL},
        key=None,
        algorithm="none",
    )
    with pytest.raises(TokenRejected):
        fixed_codec.authenticate(token, now=ISSUED_AT)


def test_verify_subject_requires_exact_match_and_validity(fixed_codec):
    token = fixed_codec.issue("t@x.com", "user-1")

    assert fixed_codec.verify_subject(token, "t@x.com", now=ISSUED_AT)
    assert not fixed_codec.verify_subject(token, "T@x.com", now=ISSUED_AT)
    assert not fixed_codec.verify_subject(token, "t@x.com", now=ISSUED_AT + TTL)
    assert not fixed_codec.verify_subject(_tamper_signature(token), "t@x.com", now=ISSUED_AT)
    assert not fixed_codec.verify_subject("garbage", "t@x.com", now=ISSUED_AT)


def test_extraction_ignores_expiry_but_not_signature(fixed_codec):
    token = fixed_codec.issue("t@x.com", "user-1")

    # Expiry only matters to authenticate/verify_subject.
    assert fixed_codec.extract_subject(token) == "t@x.com"
    assert fixed_codec.extract_user_id(token) == "user-1"
    assert not fixed_codec.verify_subject(token, "t@x.com", now=ISSUED_AT + TTL)

    with pytest.raises(TokenRejected):
        fixed_codec.extract_subject(_tamper_signature(token))


def test_empty_secret_is_refused():
    with pytest.raises(ValueError):
        TokenCodec("", ttl_seconds=TTL, issuer=ISSUER)
