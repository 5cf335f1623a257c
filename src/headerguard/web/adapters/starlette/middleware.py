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
"""Secure headers middleware for Starlette — pure ASGI.

Creates a RequestPolicyContext for every HTTP request, resolves the
security headers when the response starts, and clears the context once
the response is sent. Inside a handler::

    ctx = RequestPolicyContext.current()
    nonce = ctx.nonce()
    ctx.override_x_frame_options("DENY")
"""

from __future__ import annotations

import uuid
from typing import Any

from starlette.datastructures import Headers, MutableHeaders
from starlette.types import ASGIApp, Receive, Scope, Send

from headerguard.policy.configuration import Configuration, PolicyConfiguration
from headerguard.policy.request_context import RequestPolicyContext
from headerguard.policy.resolver import PolicyRequest, PolicyResolver

ENV_SCOPE_KEY = "headerguard.env"
"""Scope key of the out-of-band override dict (configuration key -> value)."""

_SECURE_SCHEMES = frozenset({"https", "wss"})


def policy_request_from_scope(scope: Scope) -> PolicyRequest:
    """Build a PolicyRequest whose env channel is shared with the scope."""
    headers = Headers(scope=scope)
    return PolicyRequest(
        secure=scope.get("scheme", "http") in _SECURE_SCHEMES,
        request_id=headers.get("x-request-id") or uuid.uuid4().hex,
        env=scope.setdefault(ENV_SCOPE_KEY, {}),
        user_agent=headers.get("user-agent"),
    )


def env_overrides(request: Any) -> dict[str, Any]:
    """The env override dict for a Starlette ``Request``."""
    return request.scope.setdefault(ENV_SCOPE_KEY, {})


class SecureHeadersMiddleware:
    """Adds the resolved security headers to every HTTP response.

    Uses raw ASGI protocol instead of ``BaseHTTPMiddleware`` so the request
    context set here is visible to the endpoint's task.
    """

    def __init__(
        self,
        app: ASGIApp,
        configuration: Configuration | PolicyConfiguration | None = None,
    ) -> None:
        self.app = app
        self._resolver = PolicyResolver(configuration or Configuration())

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request = policy_request_from_scope(scope)
        ctx = RequestPolicyContext.init(self._resolver.policy, request_id=request.request_id)

        async def send_with_headers(message: Any) -> None:
            if message["type"] == "http.response.start":
                headers = MutableHeaders(scope=message)
                for name, value in self._resolver.resolve(request, ctx).items():
                    headers[name] = value
            await send(message)

        try:
            await self.app(scope, receive, send_with_headers)
        finally:
            RequestPolicyContext.clear()
