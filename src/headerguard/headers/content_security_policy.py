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
"""Content-Security-Policy — directive-based source allow-lists.

Configuration is a mapping of snake_case directive names to ordered source
lists, for example::

    {"default_src": ["'self'"], "img_src": ["data:"], "enforce": True}

Directives render in insertion order as ``default-src 'self'; img-src data:``.
Without ``enforce: true`` the report-only header is emitted.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from headerguard.headers.base import OPT_OUT, Header, HeaderConfigValue, HeaderKind, HeaderSpec
from headerguard.kernel.exceptions import CSPValidationError, UnknownDirectiveError

# ---------------------------------------------------------------------------
# Source keywords
# ---------------------------------------------------------------------------
NONE = "'none'"
SELF = "'self'"
UNSAFE_INLINE = "'unsafe-inline'"
UNSAFE_EVAL = "'unsafe-eval'"
DATA = "data:"
HTTPS = "https:"

# ---------------------------------------------------------------------------
# Directives
# ---------------------------------------------------------------------------
DEFAULT_SRC = "default_src"
SCRIPT_SRC = "script_src"
STYLE_SRC = "style_src"
SANDBOX = "sandbox"

SOURCE_LIST_DIRECTIVES: frozenset[str] = frozenset({
    "base_uri",
    "child_src",
    "connect_src",
    DEFAULT_SRC,
    "font_src",
    "form_action",
    "frame_ancestors",
    "frame_src",
    "img_src",
    "manifest_src",
    "media_src",
    "object_src",
    "plugin_types",
    "report_uri",
    SANDBOX,
    SCRIPT_SRC,
    STYLE_SRC,
    "worker_src",
})

BOOLEAN_DIRECTIVES: frozenset[str] = frozenset({
    "block_all_mixed_content",
    "upgrade_insecure_requests",
})

DIRECTIVES: frozenset[str] = SOURCE_LIST_DIRECTIVES | BOOLEAN_DIRECTIVES

ENFORCE = "enforce"
FLAGS: frozenset[str] = frozenset({ENFORCE})

DEFAULT_CONFIG: Mapping[str, Any] = {DEFAULT_SRC: [HTTPS]}


def directive_header_name(directive: str) -> str:
    """``script_src`` -> ``script-src``."""
    return directive.replace("_", "-")


def unique_sources(sources: Sequence[str]) -> list[str]:
    """De-duplicate *sources*, keeping first-seen order."""
    return list(dict.fromkeys(sources))


class ContentSecurityPolicy(HeaderSpec):
    kind = HeaderKind.CSP
    header_name = "Content-Security-Policy"
    report_only_header_name = "Content-Security-Policy-Report-Only"
    default_value = "default-src https:"
    error_class = CSPValidationError

    def _render(self, config: None | str | Mapping[str, Any]) -> Header:
        if config is None:
            config = DEFAULT_CONFIG
        if isinstance(config, str):
            return self.report_only_header_name, config
        name = self.header_name if config.get(ENFORCE) else self.report_only_header_name
        return name, self.build_value(config)

    @staticmethod
    def build_value(config: Mapping[str, Any]) -> str:
        """Join directives with ``; `` and sources with a single space."""
        parts: list[str] = []
        for directive, sources in config.items():
            if directive in FLAGS:
                continue
            name = directive_header_name(directive)
            if directive in BOOLEAN_DIRECTIVES:
                if sources:
                    parts.append(name)
                continue
            tokens = unique_sources(sources)
            parts.append(" ".join([name, *tokens]) if tokens else name)
        return "; ".join(parts)

    def validate(self, config: HeaderConfigValue) -> None:
        if config is None or config is OPT_OUT:
            return
        if not isinstance(config, Mapping):
            self.fail(f"configuration must be a mapping of directives, got {config!r}")

        enforce = config.get(ENFORCE, False)
        if not isinstance(enforce, bool):
            self.fail(f"enforce must be a boolean, got {enforce!r}")

        for directive, sources in config.items():
            if directive in FLAGS:
                continue
            self.validate_directive(directive, sources)

        if DEFAULT_SRC not in config:
            self.fail("default_src is required")

    def validate_directive(self, directive: str, sources: Any) -> None:
        """Check a single directive name and its value."""
        if directive not in DIRECTIVES:
            raise UnknownDirectiveError(self.kind, directive)
        if directive in BOOLEAN_DIRECTIVES:
            if not isinstance(sources, bool):
                self.fail(f"{directive} must be a boolean, got {sources!r}")
            return
        if isinstance(sources, str) or not isinstance(sources, Sequence):
            self.fail(f"{directive} must be a list of sources, got {sources!r}")
        if not sources and directive != SANDBOX:
            self.fail(f"{directive} must not be empty, use \"'none'\" to block all sources")
        for source in sources:
            if not isinstance(source, str) or not source or any(c.isspace() or c == ";" for c in source):
                self.fail(f"{directive} contains an invalid source {source!r}")
