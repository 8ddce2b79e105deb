"""
Tests for the connection graph service.

Every successful connect/disconnect must leave the edge symmetric.
"""
from unittest.mock import patch

import pytest
from sqlalchemy.exc import SQLAlchemyError

from devsync.errors import CONFLICT, NOT_FOUND, SERVER_ERROR, VALIDATION
from devsync.models import Connection
from devsync.services import (
    audit_connections,
    connect,
    disconnect,
    get_connections,
    get_self,
    repair_connections,
)


def _connections_of(account_id):
    return get_self(account_id)["user"]["connections"]


def _ids(summaries):
    return [c["id"] for c in summaries]


class TestConnect:
    """Tests for connect()."""

    def test_edge_is_symmetric(self, alice, bob):
        """After connect, each side lists the other."""
        alice_id, _ = alice
        bob_id, _ = bob

        result = connect(bob_id, alice_id)

        assert result["connections"] == [alice_id]
        assert _ids(_connections_of(bob_id)) == [alice_id]
        assert _ids(_connections_of(alice_id)) == [bob_id]

    def test_second_connect_conflicts(self, alice, bob):
        alice_id, _ = alice
        bob_id, _ = bob
        connect(alice_id, bob_id)

        assert connect(alice_id, bob_id)["error_type"] == CONFLICT

    def test_reverse_connect_conflicts(self, alice, bob):
        """The edge is mutual, so the other side cannot connect again either."""
        alice_id, _ = alice
        bob_id, _ = bob
        connect(alice_id, bob_id)

        assert connect(bob_id, alice_id)["error_type"] == CONFLICT

    @pytest.mark.parametrize(
        "target", [9999, "9999", "not-an-id", None, "99999999999999999999999", 10**20]
    )
    def test_unknown_target_not_found(self, alice, target):
        alice_id, _ = alice
        assert connect(alice_id, target)["error_type"] == NOT_FOUND

    def test_self_connection_rejected(self, alice):
        alice_id, _ = alice
        assert connect(alice_id, alice_id)["error_type"] == VALIDATION
        assert _connections_of(alice_id) == []

    def test_no_duplicates_after_failed_attempts(self, alice, bob):
        alice_id, _ = alice
        bob_id, _ = bob
        connect(alice_id, bob_id)
        connect(alice_id, bob_id)
        connect(bob_id, alice_id)

        assert _ids(_connections_of(alice_id)) == [bob_id]
        assert _ids(_connections_of(bob_id)) == [alice_id]

    def test_repairs_one_sided_edge(self, alice, bob, db_session):
        """If only the target holds the half-edge, connect fills in the other half."""
        alice_id, _ = alice
        bob_id, _ = bob
        db_session.add(Connection(account_id=bob_id, connected_id=alice_id))
        db_session.commit()

        result = connect(alice_id, bob_id)

        assert "error" not in result
        assert _ids(_connections_of(alice_id)) == [bob_id]
        assert _ids(_connections_of(bob_id)) == [alice_id]

    def test_repairs_one_sided_edge_from_acting_side(self, alice, bob, db_session):
        """If only the acting side holds the half-edge, the mirror is written."""
        alice_id, _ = alice
        bob_id, _ = bob
        db_session.add(Connection(account_id=alice_id, connected_id=bob_id))
        db_session.commit()

        assert "error" not in connect(alice_id, bob_id)
        assert _ids(_connections_of(bob_id)) == [alice_id]

    def test_store_failure_writes_nothing(self, alice, bob):
        """A failing store surfaces a generic error."""
        alice_id, _ = alice
        bob_id, _ = bob

        with patch("devsync.services.graph_service.get_session") as mock_session:
            mock_session.return_value.query.side_effect = SQLAlchemyError("boom")
            result = connect(alice_id, bob_id)

        assert result == {"error": "Server error", "error_type": SERVER_ERROR}
        assert _connections_of(alice_id) == []
        assert _connections_of(bob_id) == []


class TestDisconnect:
    """Tests for disconnect()."""

    def test_removes_both_sides(self, alice, bob):
        alice_id, _ = alice
        bob_id, _ = bob
        connect(alice_id, bob_id)

        result = disconnect(bob_id, alice_id)

        assert result["connections"] == []
        assert _connections_of(alice_id) == []
        assert _connections_of(bob_id) == []

    def test_idempotent(self, alice, bob):
        """Disconnecting twice, or without an edge, succeeds."""
        alice_id, _ = alice
        bob_id, _ = bob
        connect(alice_id, bob_id)

        assert "error" not in disconnect(alice_id, bob_id)
        assert "error" not in disconnect(alice_id, bob_id)
        assert _connections_of(alice_id) == []

    def test_removes_one_sided_edge(self, alice, bob, db_session):
        alice_id, _ = alice
        bob_id, _ = bob
        db_session.add(Connection(account_id=bob_id, connected_id=alice_id))
        db_session.commit()

        disconnect(alice_id, bob_id)

        assert _connections_of(bob_id) == []

    @pytest.mark.parametrize("target", [9999, "99999999999999999999999", 10**20])
    def test_unknown_target_not_found(self, alice, target):
        alice_id, _ = alice
        assert disconnect(alice_id, target)["error_type"] == NOT_FOUND

    def test_leaves_other_edges(self, alice, bob, make_account):
        alice_id, _ = alice
        bob_id, _ = bob
        carol_id, _ = make_account("Carol")
        connect(alice_id, bob_id)
        connect(alice_id, carol_id)

        result = disconnect(alice_id, bob_id)

        assert result["connections"] == [carol_id]
        assert _ids(_connections_of(carol_id)) == [alice_id]


class TestGetConnections:
    """Tests for get_connections()."""

    def test_lists_summaries(self, alice, bob):
        alice_id, _ = alice
        bob_id, _ = bob
        connect(alice_id, bob_id)

        result = get_connections(bob_id)

        assert result["count"] == 1
        assert result["connections"][0]["name"] == "Alice"
        assert result["connections"][0]["email"] == "alice@x.com"

    @pytest.mark.parametrize("account_id", [9999, "99999999999999999999999", 10**20])
    def test_unknown_account(self, account_id):
        assert get_connections(account_id)["error_type"] == NOT_FOUND


class TestAuditAndRepair:
    """Tests for audit_connections() and repair_connections()."""

    def test_clean_graph_is_symmetric(self, alice, bob):
        connect(alice[0], bob[0])

        result = audit_connections()

        assert result["symmetric"] is True
        assert result["total_half_edges"] == 2
        assert result["one_sided"] == []

    def test_reports_one_sided_edge(self, alice, bob, db_session):
        alice_id, _ = alice
        bob_id, _ = bob
        db_session.add(Connection(account_id=alice_id, connected_id=bob_id))
        db_session.commit()

        result = audit_connections()

        assert result["symmetric"] is False
        assert result["one_sided"] == [{"account_id": alice_id, "connected_id": bob_id}]

    def test_dry_run_writes_nothing(self, alice, bob, db_session):
        alice_id, _ = alice
        bob_id, _ = bob
        db_session.add(Connection(account_id=alice_id, connected_id=bob_id))
        db_session.commit()

        result = repair_connections(dry_run=True)

        assert result["repaired"] == 0
        assert result["edges"] == [{"account_id": bob_id, "connected_id": alice_id}]
        assert audit_connections()["symmetric"] is False

    def test_repair_restores_symmetry(self, alice, bob, db_session):
        alice_id, _ = alice
        bob_id, _ = bob
        db_session.add(Connection(account_id=alice_id, connected_id=bob_id))
        db_session.commit()

        result = repair_connections()

        assert result["repaired"] == 1
        assert audit_connections()["symmetric"] is True
        assert _ids(_connections_of(bob_id)) == [alice_id]
