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
"""Request-scoped header overrides backed by contextvars.

Each HTTP request gets a fresh RequestPolicyContext (normally created by
the middleware). Application code reaches it through
``RequestPolicyContext.current()`` to request a CSP nonce, adjust CSP
directives, or override a header for this response only.
"""

from __future__ import annotations

import base64
import copy
import logging
import secrets
import uuid
from collections.abc import Callable, Mapping
from contextvars import ContextVar
from typing import Any

from headerguard.headers import OPT_OUT, spec_for
from headerguard.headers.base import HeaderConfigValue, HeaderKind
from headerguard.headers.content_security_policy import DEFAULT_CONFIG
from headerguard.kernel.exceptions import DuplicateOverrideError
from headerguard.policy.configuration import PolicyConfiguration
from headerguard.policy.directives import DirectiveMerger, Directives

logger = logging.getLogger(__name__)

NONCE_BYTES = 32

_policy_context_var: ContextVar[RequestPolicyContext | None] = ContextVar(
    "headerguard_policy_context", default=None
)


def generate_nonce() -> str:
    """Generate a CSP nonce: 256 random bits, base64-encoded."""
    return base64.b64encode(secrets.token_bytes(NONCE_BYTES)).decode("ascii")


class RequestPolicyContext:
    """Per-request overlay on top of a :class:`PolicyConfiguration`.

    Header overrides are single-use: setting one twice in the same request
    raises :class:`DuplicateOverrideError`. The CSP override is the exception;
    it accumulates through :meth:`append_csp_sources`,
    :meth:`override_csp_directives` and :meth:`nonce`.

    Every override is validated with the same rules as startup configuration.
    """

    def __init__(self, policy: PolicyConfiguration, request_id: str | None = None) -> None:
        self._policy = policy
        self._request_id = request_id or uuid.uuid4().hex
        self._overrides: dict[HeaderKind, HeaderConfigValue] = {}
        self._nonce: str | None = None

    @property
    def request_id(self) -> str:
        return self._request_id

    @property
    def policy(self) -> PolicyConfiguration:
        return self._policy

    def override_for(self, kind: HeaderKind) -> HeaderConfigValue:
        """The override set for *kind* in this request, or ``None``."""
        return self._overrides.get(kind)

    # -- single-use overrides --------------------------------------------------

    def override(self, kind: HeaderKind, value: HeaderConfigValue) -> None:
        """Replace the value of *kind* for this request only.

        Raises:
            DuplicateOverrideError: *kind* was already overridden in this request.
            HeaderValidationError: *value* is not valid for *kind*.
        """
        if kind in self._overrides:
            logger.warning("Duplicate %s override in request %s", kind.header_label, self._request_id)
            raise DuplicateOverrideError(kind)
        spec_for(kind).validate(value)
        self._overrides[kind] = copy.deepcopy(value)

    def override_x_frame_options(self, value: HeaderConfigValue) -> None:
        self.override(HeaderKind.X_FRAME_OPTIONS, value)

    def override_hpkp(self, config: HeaderConfigValue) -> None:
        self.override(HeaderKind.HPKP, config)

    # -- CSP -------------------------------------------------------------------

    def nonce(self) -> str:
        """Return this request's CSP nonce, creating it on first use.

        The first call also appends ``'nonce-<token>'`` and ``'unsafe-inline'``
        to ``script-src`` (and ``style-src`` when configured).
        """
        if self._nonce is None:
            self._nonce = generate_nonce()
            base = self._csp_base()
            if base is not OPT_OUT:
                self.append_csp_sources(DirectiveMerger.nonce_additions(base, self._nonce))
        return self._nonce

    def append_csp_sources(self, additions: Mapping[str, Any]) -> None:
        """Union *additions* into this request's CSP directives."""
        self._update_csp(DirectiveMerger.append, additions)

    def override_csp_directives(self, additions: Mapping[str, Any]) -> None:
        """Replace the listed CSP directives for this request."""
        self._update_csp(DirectiveMerger.override, additions)

    def _update_csp(self, merge: Callable[[Directives, Directives], dict[str, Any]], additions: Directives) -> None:
        base = self._csp_base()
        if base is OPT_OUT:
            logger.debug("CSP is opted out; ignoring directive changes %s", sorted(additions))
            return
        merged = merge(base, additions)
        if self._nonce is not None:
            # The nonce stays in script-src for the rest of the request.
            merged = DirectiveMerger.append(merged, DirectiveMerger.nonce_additions(merged, self._nonce))
        spec_for(HeaderKind.CSP).validate(merged)
        self._overrides[HeaderKind.CSP] = merged

    def _csp_base(self) -> HeaderConfigValue:
        current = self._overrides.get(HeaderKind.CSP)
        if current is None:
            current = self._policy.get(HeaderKind.CSP)
        if current is None:
            current = DEFAULT_CONFIG
        return current

    # -- request-scoped storage --------------------------------------------------

    @classmethod
    def init(cls, policy: PolicyConfiguration, request_id: str | None = None) -> RequestPolicyContext:
        """Create and set a new context for the current async task."""
        ctx = cls(policy, request_id=request_id)
        _policy_context_var.set(ctx)
        return ctx

    @classmethod
    def get_or_init(cls, request_id: str, policy: PolicyConfiguration) -> RequestPolicyContext:
        """Return the current context for *request_id*, creating it on first access."""
        ctx = _policy_context_var.get()
        if ctx is not None and ctx.request_id == request_id:
            return ctx
        return cls.init(policy, request_id=request_id)

    @classmethod
    def current(cls) -> RequestPolicyContext | None:
        """Get the context for the current async task, or None."""
        return _policy_context_var.get()

    @classmethod
    def clear(cls) -> None:
        """Clear the context for the current async task."""
        _policy_context_var.set(None)
