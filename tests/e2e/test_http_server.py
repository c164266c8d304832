"""
End-to-end tests for the HTTP server using Starlette TestClient.
Tests the info and health endpoints and the MCP mount.
"""

import pytest
from starlette.testclient import TestClient


class TestEndpoints:
    """Tests for the plain HTTP endpoints."""

    @pytest.fixture
    def client(self):
        """Synchronous test client."""
        from smart_link_formatter.app import app

        return TestClient(app)

    def test_root_endpoint(self, client):
        """Test root endpoint returns server info."""
        response = client.get("/")
        assert response.status_code == 200

        data = response.json()
        assert data["name"] == "Smart Link Formatter"
        assert "version" in data
        assert data["endpoints"]["mcp"] == "/mcp"
        assert set(data["tools"]) == {
            "format_link",
            "paste_url",
            "sweep_placeholders",
            "list_clients",
        }

    def test_health_endpoint_returns_200(self, client):
        """Test /health returns 200 with the formatting configuration."""
        response = client.get("/health")
        assert response.status_code == 200

        data = response.json()
        assert data["healthy"] is True
        assert data["failure_mode"] in {"revert", "alert"}
        assert "auto_link" in data


class TestMCPEndpoint:
    """Tests for MCP HTTP endpoint.

    Note: MCP session manager can only be started once per instance,
    so we run all MCP tests within a single client context.
    """

    def test_mcp_endpoints(self):
        """Test MCP endpoint existence and CORS handling."""
        # StreamableHTTPSessionManager.run() can only be called once per instance
        import importlib

        import smart_link_formatter.app
        import smart_link_formatter.server

        importlib.reload(smart_link_formatter.server)
        importlib.reload(smart_link_formatter.app)

        from smart_link_formatter.app import app

        with TestClient(app, raise_server_exceptions=False) as client:
            response = client.post(
                "/mcp/",
                json={
                    "jsonrpc": "2.0",
                    "id": 1,
                    "method": "initialize",
                    "params": {
                        "protocolVersion": "2024-11-05",
                        "capabilities": {},
                        "clientInfo": {"name": "test", "version": "1.0"},
                    },
                },
                headers={"Host": "localhost:8000"},
            )

            # Status varies by MCP version and content negotiation
            assert response.status_code in [200, 400, 404, 406, 421, 500]

            response = client.options(
                "/mcp/",
                headers={"Origin": "http://localhost:3000", "Host": "localhost:8000"},
            )
            assert response.status_code in [200, 204, 400, 404, 405, 406, 421]
