"""
Tests de firma HMAC de webhooks.
"""
import hashlib
import hmac

from profile_sync.application.services.webhook_signer import (
    compute_signature,
    generate_secret,
    serialize_payload,
    verify_signature,
)


SECRET = "s3cret-for-tests"


def test_signature_is_hex_hmac_sha256_of_body():
    body = b'{"event":"profile_updated"}'
    expected = hmac.new(SECRET.encode(), body, hashlib.sha256).hexdigest()
    assert compute_signature(SECRET, body) == expected
    assert compute_signature(SECRET, body.decode()) == expected


def test_verify_accepts_matching_signature():
    body = serialize_payload({"event": "profile_deleted", "email": "a@b.com"})
    assert verify_signature(SECRET, body, compute_signature(SECRET, body))


def test_verify_accepts_uppercase_hex():
    body = b"{}"
    assert verify_signature(SECRET, body, compute_signature(SECRET, body).upper())


def test_flipped_byte_is_rejected():
    body = bytearray(serialize_payload({"event": "profile_updated", "profile": {"email": "x@y.com"}}))
    signature = compute_signature(SECRET, bytes(body))
    body[5] ^= 0x01
    assert not verify_signature(SECRET, bytes(body), signature)


def test_wrong_secret_is_rejected():
    body = b'{"a":1}'
    assert not verify_signature("other-secret", body, compute_signature(SECRET, body))


def test_missing_secret_or_signature_is_rejected():
    body = b'{"a":1}'
    assert not verify_signature("", body, compute_signature(SECRET, body))
    assert not verify_signature(SECRET, body, None)
    assert not verify_signature(SECRET, body, "")
    assert not verify_signature(SECRET, body, "firmañ")


def test_serialize_payload_is_compact_utf8():
    body = serialize_payload({"name": "José", "n": 1})
    assert body == '{"name":"José","n":1}'.encode("utf-8")


def test_generate_secret_is_alphanumeric():
    secret = generate_secret()
    assert len(secret) == 32
    assert secret.isalnum()
    assert generate_secret() != secret
