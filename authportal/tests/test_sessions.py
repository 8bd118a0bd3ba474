from __future__ import annotations

import base64
import json

import pytest
from cryptography.fernet import Fernet
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.hkdf import HKDF
from itsdangerous import URLSafeSerializer

from authportal.infrastructure.sessions import (
    IDENTITY_CLAIM,
    EncryptedCookieCodec,
    SessionManager,
    SignedCookieCodec,
    build_codec,
)
from authportal.infrastructure.sessions.codec import DEFAULT_SALT

SECRET = "unit-test-secret"


@pytest.fixture(params=[SignedCookieCodec, EncryptedCookieCodec], ids=["signed", "encrypted"])
def codec_cls(request):
    return request.param


def test_codec_round_trip(codec_cls) -> None:
    codec = codec_cls(SECRET)

    token = codec.encode({IDENTITY_CLAIM: "alice"})

    assert codec.decode(token) == {IDENTITY_CLAIM: "alice"}


def test_token_from_another_key_is_rejected(codec_cls) -> None:
    token = codec_cls("some-other-secret").encode({IDENTITY_CLAIM: "alice"})

    assert codec_cls(SECRET).decode(token) is None


@pytest.mark.parametrize("token", ["", "garbage", "a.b.c", "ä-non-ascii"])
def test_malformed_tokens_mean_no_session(codec_cls, token: str) -> None:
    assert codec_cls(SECRET).decode(token) is None


def test_signed_token_with_swapped_payload_is_rejected() -> None:
    codec = SignedCookieCodec(SECRET)
    genuine = codec.encode({IDENTITY_CLAIM: "alice"})
    forged_payload = SignedCookieCodec("attacker-key").encode({IDENTITY_CLAIM: "mallory"})

    forged = forged_payload.rsplit(".", 1)[0] + "." + genuine.rsplit(".", 1)[1]

    assert codec.decode(forged) is None


def test_signed_payload_that_is_not_a_claims_map_is_rejected() -> None:
    serializer = URLSafeSerializer(SECRET, salt=DEFAULT_SALT)
    codec = SignedCookieCodec(SECRET)

    assert codec.decode(serializer.dumps(["alice"])) is None
    assert codec.decode(serializer.dumps({IDENTITY_CLAIM: 42})) is None


def test_encrypted_token_hides_the_identity() -> None:
    token = EncryptedCookieCodec(SECRET).encode({IDENTITY_CLAIM: "alice"})

    assert "alice" not in token


def test_build_codec_selects_backend() -> None:
    assert isinstance(build_codec(SECRET), SignedCookieCodec)
    assert isinstance(build_codec(SECRET, encrypt=True), EncryptedCookieCodec)


def test_manager_set_get_clear() -> None:
    manager = SessionManager()
    session: dict[str, str] = {}

    assert manager.get(session) is None

    manager.set(session, IDENTITY_CLAIM, "alice")
    assert manager.get(session) == "alice"
    assert manager.get_identity(session) == "alice"

    manager.clear(session)
    assert session == {}
    assert manager.get(session) is None


def test_manager_ignores_empty_identity() -> None:
    manager = SessionManager()

    assert manager.get({IDENTITY_CLAIM: ""}) is None
    assert manager.get({"other": "alice"}) is None


def test_clear_on_empty_session_is_a_no_op() -> None:
    manager = SessionManager()
    session: dict[str, str] = {}

    manager.clear(session)

    assert session == {}


def test_encrypted_key_is_hkdf_derived_from_secret() -> None:
    key = HKDF(
        algorithm=hashes.SHA256(),
        length=32,
        salt=DEFAULT_SALT.encode("utf-8"),
        info=b"authportal session cookie encryption",
    ).derive(SECRET.encode("utf-8"))
    token = EncryptedCookieCodec(SECRET).encode({IDENTITY_CLAIM: "alice"})

    payload = Fernet(base64.urlsafe_b64encode(key)).decrypt(token.encode("ascii"))

    assert json.loads(payload) == {IDENTITY_CLAIM: "alice"}


def test_encrypted_tokens_are_bound_to_the_salt() -> None:
    token = EncryptedCookieCodec(SECRET, salt="authportal.session.v2").encode({IDENTITY_CLAIM: "alice"})

    assert EncryptedCookieCodec(SECRET).decode(token) is None
