"""
Tests for the authorization gate.
"""
from devsync.errors import UNAUTHENTICATED
from devsync.security import issue_token
from devsync.services import authorize, resolve_identity


class TestAuthorize:
    """Tests for authorize(), the ownership predicate."""

    def test_owner_allowed(self):
        assert authorize(3, 3) is True

    def test_other_identity_denied(self):
        assert authorize(3, 4) is False

    def test_missing_identity_denied(self):
        assert authorize(None, None) is False


class TestResolveIdentity:
    """Tests for resolve_identity(), token to acting account."""

    def test_valid_token_resolves(self, alice):
        """A token for an existing account yields its id and no error."""
        alice_id, token = alice
        acting_id, error = resolve_identity(token)
        assert acting_id == alice_id
        assert error is None

    def test_invalid_token_rejected(self):
        acting_id, error = resolve_identity("garbage")
        assert acting_id is None
        assert error["error_type"] == UNAUTHENTICATED

    def test_missing_token_rejected(self):
        acting_id, error = resolve_identity(None)
        assert acting_id is None
        assert error["error_type"] == UNAUTHENTICATED

    def test_token_for_unknown_account_rejected(self):
        """A correctly signed token for an account that does not exist is rejected."""
        acting_id, error = resolve_identity(issue_token(9999))
        assert acting_id is None
        assert error["error_type"] == UNAUTHENTICATED

    def test_rejections_are_uniform(self):
        """Every token failure produces the same error."""
        _, bad = resolve_identity("garbage")
        _, expired = resolve_identity(issue_token(1, ttl_seconds=-5))
        _, unknown = resolve_identity(issue_token(9999))
        assert bad == expired == unknown

    def test_out_of_range_subject_rejected(self):
        """A signed token whose subject cannot be a stored account id is rejected."""
        acting_id, error = resolve_identity(issue_token(10**20))
        assert acting_id is None
        assert error["error_type"] == UNAUTHENTICATED
