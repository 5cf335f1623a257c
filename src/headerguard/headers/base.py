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
"""Header kinds, the opt-out sentinel, and the HeaderSpec contract.

A configuration value for any header kind is one of:

- ``None`` — unset, use the header's built-in default
- ``OPT_OUT`` — never emit the header, even if it has a default
- a ``str`` — the raw header value
- a ``Mapping`` — structured options whose shape depends on the kind
"""

from __future__ import annotations

import abc
import re
from collections.abc import Mapping
from enum import Enum
from typing import Any, ClassVar, NoReturn, TypeAlias

from headerguard.kernel.exceptions import HeaderValidationError


class OptOut(Enum):
    """Sentinel type for an explicit opt-out of a header."""

    OPT_OUT = "optout_of_protection"

    def __repr__(self) -> str:
        return "OPT_OUT"


OPT_OUT = OptOut.OPT_OUT
"""Configuration value that disables a header entirely."""

HeaderConfigValue: TypeAlias = "None | OptOut | str | Mapping[str, Any]"

Header: TypeAlias = tuple[str, str]
"""A rendered ``(name, value)`` pair."""

CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")
"""Characters that may never appear in a header value."""


class HeaderKind(str, Enum):
    """The eight security response headers, valued by their configuration key."""

    CSP = "csp"
    HSTS = "hsts"
    HPKP = "hpkp"
    X_FRAME_OPTIONS = "x_frame_options"
    X_XSS_PROTECTION = "x_xss_protection"
    X_CONTENT_TYPE_OPTIONS = "x_content_type_options"
    X_DOWNLOAD_OPTIONS = "x_download_options"
    X_PERMITTED_CROSS_DOMAIN_POLICIES = "x_permitted_cross_domain_policies"

    @property
    def header_label(self) -> str:
        return _LABELS[self]


_LABELS: dict[HeaderKind, str] = {
    HeaderKind.CSP: "Content-Security-Policy",
    HeaderKind.HSTS: "Strict-Transport-Security",
    HeaderKind.HPKP: "Public-Key-Pins",
    HeaderKind.X_FRAME_OPTIONS: "X-Frame-Options",
    HeaderKind.X_XSS_PROTECTION: "X-XSS-Protection",
    HeaderKind.X_CONTENT_TYPE_OPTIONS: "X-Content-Type-Options",
    HeaderKind.X_DOWNLOAD_OPTIONS: "X-Download-Options",
    HeaderKind.X_PERMITTED_CROSS_DOMAIN_POLICIES: "X-Permitted-Cross-Domain-Policies",
}


class HeaderSpec(abc.ABC):
    """Knows how to validate and render the configuration of one header kind.

    Subclasses set the class attributes and implement :meth:`validate` and
    :meth:`_render`. ``render`` handles the opt-out sentinel uniformly.
    """

    kind: ClassVar[HeaderKind]
    header_name: ClassVar[str]
    default_value: ClassVar[str | None]
    error_class: ClassVar[type[HeaderValidationError]]

    def render(self, config: HeaderConfigValue) -> Header | None:
        """Render *config* to a ``(name, value)`` pair, or ``None`` if opted out."""
        if config is OPT_OUT:
            return None
        return self._render(config)

    @abc.abstractmethod
    def _render(self, config: None | str | Mapping[str, Any]) -> Header | None: ...

    @abc.abstractmethod
    def validate(self, config: HeaderConfigValue) -> None:
        """Raise this kind's validation error if *config* is not acceptable."""
        ...

    def fail(self, reason: str) -> NoReturn:
        raise self.error_class(self.kind, reason)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.header_name!r})"


class ValueHeaderSpec(HeaderSpec):
    """Base for headers whose configuration is a single token.

    Accepts a bare string or a mapping with a ``value`` key.
    """

    default_value: ClassVar[str]
    expected: ClassVar[str]

    def _render(self, config: None | str | Mapping[str, Any]) -> Header:
        if config is None:
            return self.header_name, self.default_value
        return self.header_name, self._value_of(config)

    def validate(self, config: HeaderConfigValue) -> None:
        if config is None or config is OPT_OUT:
            return
        if isinstance(config, Mapping):
            value = config.get("value")
        else:
            value = config
        if not isinstance(value, str) or CONTROL_CHARS.search(value) or not self.is_valid(value):
            self.fail(f"value must be {self.expected}, got {value!r}")

    @abc.abstractmethod
    def is_valid(self, value: str) -> bool: ...

    @staticmethod
    def _value_of(config: str | Mapping[str, Any]) -> str:
        if isinstance(config, Mapping):
            return str(config["value"])
        return config
