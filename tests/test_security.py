"""Unit tests for app.core.security: bcrypt password hashing and the JWT token codec."""

import unittest
from datetime import UTC, datetime, timedelta

import jwt

from app.core.security import (
    BadSignatureError,
    MalformedTokenError,
    TokenCodec,
    TokenExpiredError,
    get_token_codec,
    hash_password,
    verify_password,
)

SECRET = "k" * 64
OTHER_SECRET = "z" * 64


def _codec(secret: str = SECRET, ttl: timedelta = timedelta(hours=1)) -> TokenCodec:
    return TokenCodec(secret=secret, algorithm="HS512", ttl=ttl)


def _mutate_payload(token: str) -> str:
    """Swap one base64url character in the middle of the payload segment."""
    header, payload, signature = token.split(".")
    i = len(payload) // 2
    replacement = "A" if payload[i] != "A" else "B"
    return ".".join([header, payload[:i] + replacement + payload[i + 1:], signature])


class TestPasswordHashing(unittest.TestCase):
    def test_hash_is_not_plaintext_and_verifies(self) -> None:
        digest = hash_password("correct horse", rounds=4)
        self.assertNotEqual(digest, "correct horse")
        self.assertTrue(digest.startswith("$2"))
        self.assertTrue(verify_password("correct horse", digest))

    def test_wrong_password_does_not_verify(self) -> None:
        digest = hash_password("correct horse", rounds=4)
        self.assertFalse(verify_password("battery staple", digest))

    def test_same_password_hashes_differently(self) -> None:
        self.assertNotEqual(
            hash_password("correct horse", rounds=4),
            hash_password("correct horse", rounds=4),
        )

    def test_malformed_digest_returns_false(self) -> None:
        for digest in ("", "not-a-bcrypt-hash", "$2b$04$short"):
            with self.subTest(digest=digest):
                self.assertFalse(verify_password("anything", digest))


class TestTokenRoundTrip(unittest.TestCase):
    def test_validate_returns_issued_subject(self) -> None:
        codec = _codec()
        for subject in ("alice", "bob@example.com", "Zoë", "a b c", "x" * 200):
            with self.subTest(subject=subject):
                self.assertEqual(codec.validate(codec.issue(subject)), subject)

    def test_expiry_is_issue_time_plus_ttl(self) -> None:
        codec = _codec(ttl=timedelta(milliseconds=86_400_000))
        claims = jwt.decode(codec.issue("alice"), options={"verify_signature": False})
        self.assertEqual(claims["sub"], "alice")
        self.assertEqual(claims["exp"] - claims["iat"], 86_400)


class TestTokenRejection(unittest.TestCase):
    def test_expired_token_reports_expired(self) -> None:
        codec = _codec(ttl=timedelta(minutes=5))
        token = codec.issue("alice", now=datetime.now(UTC) - timedelta(hours=1))
        with self.assertRaises(TokenExpiredError):
            codec.validate(token)

    def test_mutated_payload_reports_bad_signature(self) -> None:
        codec = _codec()
        with self.assertRaises(BadSignatureError):
            codec.validate(_mutate_payload(codec.issue("alice")))

    def test_mutated_expired_token_reports_bad_signature(self) -> None:
        codec = _codec(ttl=timedelta(minutes=5))
        token = codec.issue("alice", now=datetime.now(UTC) - timedelta(hours=1))
        with self.assertRaises(BadSignatureError):
            codec.validate(_mutate_payload(token))

    def test_token_from_other_secret_reports_bad_signature(self) -> None:
        token = _codec(secret=OTHER_SECRET).issue("alice")
        with self.assertRaises(BadSignatureError):
            _codec().validate(token)

    def test_garbage_reports_malformed(self) -> None:
        codec = _codec()
        for token in ("", "not-a-token", "a.b.c", "only.two"):
            with self.subTest(token=token):
                with self.assertRaises(MalformedTokenError):
                    codec.validate(token)

    def test_missing_subject_reports_malformed(self) -> None:
        now = datetime.now(UTC)
        token = jwt.encode({"iat": now, "exp": now + timedelta(hours=1)}, SECRET, algorithm="HS512")
        with self.assertRaises(MalformedTokenError):
            _codec().validate(token)

    def test_unsigned_token_reports_malformed(self) -> None:
        now = datetime.now(UTC)
        token = jwt.encode(
            {"sub": "alice", "iat": now, "exp": now + timedelta(hours=1)},
            None,
            algorithm="none",
        )
        with self.assertRaises(MalformedTokenError):
            _codec().validate(token)


class TestProcessCodec(unittest.TestCase):
    def test_process_codec_is_shared(self) -> None:
        first = get_token_codec()
        second = get_token_codec()
        self.assertIs(first, second)
        self.assertEqual(second.validate(first.issue("alice")), "alice")


if __name__ == "__main__":
    unittest.main()
