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
"""PolicyResolver — computes the final security headers for one request.

Resolution order per header kind (first present source wins):

1. the request's env channel (``PolicyRequest.env[kind.value]``)
2. the request's :class:`RequestPolicyContext` override
3. the cached default header from the :class:`PolicyConfiguration`
4. the configured value, rendered fresh
5. the header's built-in default

HSTS and HPKP are always omitted on requests that are not over HTTPS.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any

from headerguard.headers import ALL_HEADER_SPECS, SSL_ONLY_KINDS
from headerguard.headers.base import Header, HeaderKind, HeaderSpec
from headerguard.policy.configuration import Configuration, PolicyConfiguration
from headerguard.policy.request_context import RequestPolicyContext


@dataclass
class PolicyRequest:
    """What the resolver needs to know about an incoming request.

    Attributes:
        secure: Whether the request arrived over HTTPS.
        request_id: Stable identity used to find the request's context.
        env: Out-of-band header values keyed by configuration key
            (e.g. ``"x_frame_options"``). These are trusted and not validated.
        user_agent: The client's ``User-Agent`` header, if any.
    """

    secure: bool
    request_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    env: dict[str, Any] = field(default_factory=dict)
    user_agent: str | None = None


class PolicyResolver:
    """Resolves header name to value for a request.

    For a fixed policy, context and transport flag the result is always the
    same. The CSP is rendered without regard to the user agent.
    """

    def __init__(self, configuration: Configuration | PolicyConfiguration) -> None:
        self._configuration = configuration

    @property
    def policy(self) -> PolicyConfiguration:
        if isinstance(self._configuration, Configuration):
            return self._configuration.current
        return self._configuration

    def resolve(
        self,
        request: PolicyRequest,
        context: RequestPolicyContext | None = None,
    ) -> dict[str, str]:
        """Return the security headers to add to the response for *request*."""
        if context is None:
            context = self._context_for(request)
        policy = context.policy if context is not None else self.policy
        suppressed = frozenset() if request.secure else SSL_ONLY_KINDS

        headers: dict[str, str] = {}
        for spec in ALL_HEADER_SPECS:
            if spec.kind in suppressed:
                continue
            header = self._resolve_header(spec, request, context, policy)
            if header is not None:
                name, value = header
                headers[name] = value
        return headers

    @staticmethod
    def _resolve_header(
        spec: HeaderSpec,
        request: PolicyRequest,
        context: RequestPolicyContext | None,
        policy: PolicyConfiguration,
    ) -> Header | None:
        kind: HeaderKind = spec.kind
        override = request.env.get(kind.value)
        if override is None and context is not None:
            override = context.override_for(kind)
        if override is not None:
            return spec.render(override)

        cached = policy.cached_header(kind)
        if cached is not None:
            return cached

        configured = policy.get(kind)
        if configured is not None:
            return spec.render(configured)
        return spec.render(None)

    @staticmethod
    def _context_for(request: PolicyRequest) -> RequestPolicyContext | None:
        ctx = RequestPolicyContext.current()
        if ctx is not None and ctx.request_id == request.request_id:
            return ctx
        return None
