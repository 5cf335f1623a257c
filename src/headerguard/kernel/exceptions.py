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
"""Unified exception hierarchy for HeaderGuard.

All library exceptions inherit from HeaderGuardException, enabling unified
error handling. Header validation errors are header-specific so callers
can tell which header was misconfigured.

Categories:
- ValidationException: a header configuration value is invalid
- ConflictException: a request-scoped value was set twice
- ConfigurationException: a configuration source could not be read
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from headerguard.headers.base import HeaderKind


# =============================================================================
# Base Exception
# =============================================================================


class HeaderGuardException(Exception):
    """Base exception for all HeaderGuard errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "XFO_INVALID").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


class ValidationException(HeaderGuardException):
    """Input validation failures."""


class ConflictException(HeaderGuardException):
    """Operation conflicts with current state (e.g. a value already set)."""


class ConfigurationException(HeaderGuardException):
    """A configuration source is missing or malformed."""


# =============================================================================
# Header Validation Errors
# =============================================================================


class HeaderValidationError(ValidationException):
    """A configuration value for one header kind failed validation.

    Args:
        kind: The header kind whose value is invalid.
        reason: Why the value was rejected.
    """

    code_prefix = "HEADER"

    def __init__(self, kind: HeaderKind, reason: str) -> None:
        super().__init__(
            f"Invalid {kind.header_label} configuration: {reason}",
            code=f"{self.code_prefix}_INVALID",
            context={"kind": kind.value},
        )
        self.kind = kind
        self.reason = reason


class CSPValidationError(HeaderValidationError):
    code_prefix = "CSP"


class UnknownDirectiveError(CSPValidationError):
    """A CSP configuration or merge referenced an unrecognised directive."""

    code_prefix = "CSP_DIRECTIVE"

    def __init__(self, kind: HeaderKind, directive: str) -> None:
        super().__init__(kind, f"unknown directive '{directive}'")
        self.directive = directive


class STSValidationError(HeaderValidationError):
    code_prefix = "HSTS"


class PublicKeyPinsValidationError(HeaderValidationError):
    code_prefix = "HPKP"


class XFOValidationError(HeaderValidationError):
    code_prefix = "XFO"


class XXssProtectionValidationError(HeaderValidationError):
    code_prefix = "X_XSS"


class XContentTypeOptionsValidationError(HeaderValidationError):
    code_prefix = "XCTO"


class XDOValidationError(HeaderValidationError):
    code_prefix = "XDO"


class XPCDPValidationError(HeaderValidationError):
    code_prefix = "XPCDP"


# =============================================================================
# Request-scoped Errors
# =============================================================================


class DuplicateOverrideError(ConflictException):
    """A single-use per-request override was set a second time."""

    def __init__(self, kind: HeaderKind) -> None:
        super().__init__(
            f"{kind.header_label} may only be overridden once per request",
            code="DUPLICATE_OVERRIDE",
            context={"kind": kind.value},
        )
        self.kind = kind
