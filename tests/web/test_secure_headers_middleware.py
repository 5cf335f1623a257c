# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Tests for SecureHeadersMiddleware."""

from __future__ import annotations

from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.requests import Request
from starlette.responses import JSONResponse, PlainTextResponse
from starlette.routing import Route
from starlette.testclient import TestClient

from headerguard.headers import OPT_OUT
from headerguard.policy.configuration import Configuration
from headerguard.policy.request_context import RequestPolicyContext
from headerguard.web.adapters.starlette import SecureHeadersMiddleware, env_overrides


async def _hello(request: Request) -> JSONResponse:
    return JSONResponse({"msg": "ok"})


async def _nonce(request: Request) -> PlainTextResponse:
    ctx = RequestPolicyContext.current()
    return PlainTextResponse(ctx.nonce())


async def _deny(request: Request) -> JSONResponse:
    RequestPolicyContext.current().override_x_frame_options("DENY")
    return JSONResponse({"msg": "ok"})


async def _no_csp(request: Request) -> JSONResponse:
    env_overrides(request)["csp"] = OPT_OUT
    return JSONResponse({"msg": "ok"})


async def _request_id(request: Request) -> PlainTextResponse:
    return PlainTextResponse(RequestPolicyContext.current().request_id)


def _make_client(configuration: Configuration | None = None, base_url: str = "https://testserver") -> TestClient:
    app = Starlette(
        routes=[
            Route("/hello", _hello),
            Route("/nonce", _nonce),
            Route("/deny", _deny),
            Route("/no-csp", _no_csp),
            Route("/request-id", _request_id),
        ],
        middleware=[Middleware(SecureHeadersMiddleware, configuration=configuration)],
    )
    return TestClient(app, base_url=base_url)


class TestSecureHeadersMiddleware:
    def test_default_headers_applied(self) -> None:
        resp = _make_client().get("/hello")

        assert resp.status_code == 200
        assert resp.headers["X-Frame-Options"] == "SAMEORIGIN"
        assert resp.headers["Strict-Transport-Security"] == "max-age=631138519"
        assert resp.headers["X-Content-Type-Options"] == "nosniff"
        assert resp.headers["X-Download-Options"] == "noopen"
        assert resp.headers["X-Permitted-Cross-Domain-Policies"] == "none"
        assert resp.headers["X-XSS-Protection"] == "1; mode=block"
        assert resp.headers["Content-Security-Policy-Report-Only"] == "default-src https:"
        assert "Public-Key-Pins" not in resp.headers

    def test_plain_http_has_no_hsts(self) -> None:
        resp = _make_client(base_url="http://testserver").get("/hello")

        assert "Strict-Transport-Security" not in resp.headers
        assert resp.headers["X-Frame-Options"] == "SAMEORIGIN"

    def test_configured_policy(self) -> None:
        configuration = Configuration()

        def setup(config):
            config.x_frame_options = "DENY"
            config.csp = {"default_src": ["'self'"], "enforce": True}

        configuration.configure(setup)
        resp = _make_client(configuration).get("/hello")

        assert resp.headers["X-Frame-Options"] == "DENY"
        assert resp.headers["Content-Security-Policy"] == "default-src 'self'"

    def test_nonce_in_policy(self) -> None:
        configuration = Configuration()
        configuration.configure(lambda config: setattr(config, "csp", {"default_src": ["'self'"], "enforce": True}))
        resp = _make_client(configuration).get("/nonce")

        nonce = resp.text
        assert resp.headers["Content-Security-Policy"] == (
            f"default-src 'self'; script-src 'nonce-{nonce}' 'unsafe-inline'"
        )

    def test_nonce_differs_per_request(self) -> None:
        client = _make_client()
        assert client.get("/nonce").text != client.get("/nonce").text

    def test_handler_override(self) -> None:
        client = _make_client()
        assert client.get("/deny").headers["X-Frame-Options"] == "DENY"
        assert client.get("/hello").headers["X-Frame-Options"] == "SAMEORIGIN"

    def test_env_override(self) -> None:
        resp = _make_client().get("/no-csp")
        assert "Content-Security-Policy-Report-Only" not in resp.headers

    def test_uses_x_request_id_header(self) -> None:
        resp = _make_client().get("/request-id", headers={"X-Request-Id": "custom-123"})
        assert resp.text == "custom-123"

    def test_context_cleared_after_request(self) -> None:
        _make_client().get("/hello")
        assert RequestPolicyContext.current() is None
