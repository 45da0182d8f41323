"""Tests for bearer token verification and the role check in tokens.py.

These sign real tokens with PyJWT rather than mocking the decoder.
"""

from datetime import datetime, timezone, timedelta

import jwt
import pytest

from userhub.app.errors import Unauthorized, Forbidden
from userhub.app.tokens import TokenVerifier, authorize
from userhub.models.user import Identity

SECRET = "unit-test-secret-that-is-at-least-32-bytes"


@pytest.fixture
def verifier() -> TokenVerifier:
    return TokenVerifier(secret=SECRET)


def create_test_token(
    secret: str = SECRET,
    expires_in: int = 3600,
    claims: dict | None = None,
    include_exp: bool = True,
) -> str:
    """Create a signed HS256 token for testing."""
    now = datetime.now(timezone.utc)
    payload = {
        "id": "user-123",
        "role": "user",
        "email": "test@example.com",
        "username": "test_user",
        "iat": now,
    }
    if include_exp:
        payload["exp"] = now + timedelta(seconds=expires_in)
    if claims:
        payload.update(claims)
    return jwt.encode(payload, secret, algorithm="HS256")


class TestVerify:
    """Test TokenVerifier.verify."""

    def test_valid_bearer_token(self, verifier: TokenVerifier):
        """A valid token yields the identity from its claims."""
        identity = verifier.verify(f"Bearer {create_test_token()}")

        assert identity == Identity(
            id="user-123",
            role="user",
            email="test@example.com",
            username="test_user",
        )

    def test_bare_token_without_scheme(self, verifier: TokenVerifier):
        """The raw header may carry the token with no 'Bearer' prefix."""
        identity = verifier.verify(create_test_token())
        assert identity.id == "user-123"

    def test_scheme_is_case_insensitive(self, verifier: TokenVerifier):
        identity = verifier.verify(f"bearer {create_test_token()}")
        assert identity.id == "user-123"

    @pytest.mark.parametrize("header", [None, "", "   ", "Bearer "])
    def test_missing_header(self, verifier: TokenVerifier, header):
        """An absent or empty header is rejected before decoding."""
        with pytest.raises(Unauthorized):
            verifier.verify(header)

    def test_expired_token(self, verifier: TokenVerifier):
        token = create_test_token(expires_in=-3600)
        with pytest.raises(Unauthorized):
            verifier.verify(f"Bearer {token}")

    def test_invalid_signature(self, verifier: TokenVerifier):
        token = create_test_token(secret="another-secret-that-is-at-least-32-bytes")
        with pytest.raises(Unauthorized):
            verifier.verify(f"Bearer {token}")

    def test_malformed_token(self, verifier: TokenVerifier):
        with pytest.raises(Unauthorized):
            verifier.verify("Bearer not.a.valid.jwt.token")

    def test_token_without_expiry(self, verifier: TokenVerifier):
        """exp is checked when present but not required."""
        token = create_test_token(include_exp=False)
        identity = verifier.verify(f"Bearer {token}")
        assert identity.id == "user-123"
        assert identity.role == "user"

    def test_token_without_role(self, verifier: TokenVerifier):
        """A token with no role authenticates but carries no role."""
        token = create_test_token(claims={"role": None})
        identity = verifier.verify(f"Bearer {token}")
        assert identity.id == "user-123"
        assert identity.role is None

    def test_non_string_role_is_dropped(self, verifier: TokenVerifier):
        token = create_test_token(claims={"role": ["admin"]})
        assert verifier.verify(f"Bearer {token}").role is None

    def test_token_without_id_or_sub(self, verifier: TokenVerifier):
        token = create_test_token(claims={"id": None})
        with pytest.raises(Unauthorized):
            verifier.verify(f"Bearer {token}")

    def test_sub_used_when_id_missing(self, verifier: TokenVerifier):
        token = create_test_token(claims={"id": None, "sub": "subject-456"})
        identity = verifier.verify(f"Bearer {token}")
        assert identity.id == "subject-456"

    def test_wrong_algorithm_rejected(self):
        """A verifier pinned to HS512 rejects HS256 tokens."""
        verifier = TokenVerifier(secret=SECRET, algorithm="HS512")
        with pytest.raises(Unauthorized):
            verifier.verify(f"Bearer {create_test_token()}")


class TestIssue:
    """Test TokenVerifier.issue."""

    def test_issued_token_verifies(self, verifier: TokenVerifier):
        identity = Identity(id="abc", role="admin", email="a@example.com")
        token = verifier.issue(identity)
        assert verifier.verify(token) == identity

    def test_issued_token_expiry(self, verifier: TokenVerifier):
        token = verifier.issue(
            Identity(id="abc", role="user"), expires_in=timedelta(minutes=5)
        )
        claims = jwt.decode(token, SECRET, algorithms=["HS256"])
        assert 0 < claims["exp"] - claims["iat"] <= 300

    def test_issued_token_carries_sub(self, verifier: TokenVerifier):
        token = verifier.issue(Identity(id="abc", role="user"))
        claims = jwt.decode(token, SECRET, algorithms=["HS256"])
        assert claims["sub"] == "abc"
        assert claims["id"] == "abc"


class TestAuthorize:
    """Test the single-role equality check."""

    def test_matching_role(self):
        identity = Identity(id="1", role="admin")
        assert authorize(identity, "admin") is identity

    def test_different_role(self):
        with pytest.raises(Forbidden):
            authorize(Identity(id="1", role="user"), "admin")

    def test_missing_identity(self):
        with pytest.raises(Forbidden):
            authorize(None, "admin")

    def test_no_role_hierarchy(self):
        """An admin is not implicitly granted the 'user' role."""
        with pytest.raises(Forbidden):
            authorize(Identity(id="1", role="admin"), "user")

    def test_role_comparison_is_exact(self):
        with pytest.raises(Forbidden):
            authorize(Identity(id="1", role="Admin"), "admin")

    def test_identity_without_role(self):
        with pytest.raises(Forbidden):
            authorize(Identity(id="1"), "admin")
