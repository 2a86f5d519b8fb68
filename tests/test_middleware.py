"""
Inkpost Backend — Middleware Tests
===================================

What:  Request id propagation into headers and error bodies.
"""

import pytest

from inkpost.middleware.request_id import resolve_request_id


class TestResolveRequestId:

    def test_keeps_well_formed_caller_id(self):
        assert resolve_request_id("edge-7f3a.1") == "edge-7f3a.1"

    @pytest.mark.parametrize("header", [None, "", "x" * 65, "bad id\nInjected: 1", "<script>"])
    def test_replaces_missing_or_unsafe_id(self, header):
        rid = resolve_request_id(header)
        assert rid != header
        assert len(rid) == 8


class TestRequestIdHeader:

    @pytest.mark.asyncio
    async def test_generated_id_is_echoed(self, test_client):
        response = await test_client.get("/post")
        assert len(response.headers["X-Request-ID"]) == 8

    @pytest.mark.asyncio
    async def test_caller_id_reaches_error_body(self, test_client):
        response = await test_client.get("/profile", headers={"X-Request-ID": "trace-42"})

        assert response.status_code == 401
        assert response.headers["X-Request-ID"] == "trace-42"
        assert response.json()["request_id"] == "trace-42"
