"""
API endpoint tests for health and basic endpoints
"""
import pytest
from fastapi import Request

from app.core.exceptions import unhandled_error_handler, format_validation_errors


class TestHealthEndpoints:
    """Tests for health check endpoints"""
    
    @pytest.mark.unit
    async def test_health_check(self, client):
        """Test health check endpoint"""
        response = await client.get("/health")
        
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert "version" in data
    
    @pytest.mark.unit
    async def test_root_endpoint(self, client):
        """Test root endpoint"""
        response = await client.get("/")
        
        assert response.status_code == 200
        data = response.json()
        assert "message" in data
        assert data["loans"] == "/api/loans"


class TestCors:
    """Cross-origin requests are allowed from any origin"""
    
    @pytest.mark.unit
    async def test_preflight(self, client):
        response = await client.options("/api/loans", headers={
            "Origin": "http://frontend.example",
            "Access-Control-Request-Method": "DELETE"
        })
        
        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "*"
        assert "DELETE" in response.headers["access-control-allow-methods"]
    
    @pytest.mark.unit
    async def test_simple_request(self, client):
        response = await client.get("/api/loans", headers={"Origin": "http://frontend.example"})
        
        assert response.headers["access-control-allow-origin"] == "*"


class TestErrorHandlers:
    """Tests for error response shaping"""
    
    @pytest.mark.unit
    def test_format_validation_errors(self):
        errors = format_validation_errors([
            {"loc": ("body", "loanAmount"), "msg": "Input should be greater than or equal to 100"},
            {"loc": ("query", "status"), "msg": "Input should be 'PENDING'"},
            {"loc": ("body",), "msg": "Field required"},
            {"loc": ("body", 17), "msg": "JSON decode error", "type": "json_invalid"},
        ])
        
        assert errors == [
            {"field": "loanAmount", "message": "Input should be greater than or equal to 100"},
            {"field": "status", "message": "Input should be 'PENDING'"},
            {"field": "body", "message": "Field required"},
            {"field": "body", "message": "JSON decode error"},
        ]
    
    @pytest.mark.unit
    async def test_unhandled_error_is_generic(self):
        request = Request({"type": "http", "method": "GET", "path": "/api/loans", "headers": [], "query_string": b""})
        
        response = await unhandled_error_handler(request, RuntimeError("database unavailable"))
        
        assert response.status_code == 500
        assert response.body == b'{"detail":"Internal server error"}'
