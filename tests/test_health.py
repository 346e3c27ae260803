# =============================================================================
# tests/test_health.py - Health Endpoint Tests
# =============================================================================

import pytest

from lib.database import ConnectionState


class TestHealth:
    """GET /api/health/live and /api/health/ready"""

    def test_liveness(self, client):
        response = client.get("/api/health/live")

        assert response.status_code == 200
        assert response.json()["status"] == "alive"

    @pytest.mark.parametrize("state,expected", [
        (ConnectionState.CONNECTED, "ready"),
        (ConnectionState.CONNECTING, "degraded"),
        (ConnectionState.FAILED, "degraded"),
        (ConnectionState.DISCONNECTED, "degraded"),
    ])
    def test_readiness_follows_connection_state(self, client, context, state, expected):
        context.database.state = state

        response = client.get("/api/health/ready")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == expected
        assert data["database"] == state.value
        assert data["environment"] == "development"
