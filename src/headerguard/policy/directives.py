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
"""DirectiveMerger — explicit append/override merging of CSP directive mappings.

``append`` unions source lists (first-seen order, no duplicates) and
``override`` replaces them. Neither mutates its inputs.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from headerguard.headers.content_security_policy import (
    ContentSecurityPolicy,
    FLAGS,
    NONE,
    SCRIPT_SRC,
    SOURCE_LIST_DIRECTIVES,
    STYLE_SRC,
    UNSAFE_INLINE,
    unique_sources,
)

Directives = Mapping[str, Any]

_CSP = ContentSecurityPolicy()


def nonce_source(nonce: str) -> str:
    """``abc`` -> ``'nonce-abc'``."""
    return f"'nonce-{nonce}'"


class DirectiveMerger:
    """Merges a base CSP configuration with per-request additions.

    Added directives are validated first; an unrecognised name raises
    :class:`UnknownDirectiveError`.
    """

    @staticmethod
    def append(base: Directives, additions: Directives) -> dict[str, Any]:
        """Union each added directive's sources into the base list.

        A base list of exactly ``['none']`` is replaced rather than unioned.
        Boolean directives and flags are simply set.
        """
        DirectiveMerger._check(additions)
        result = DirectiveMerger._copy(base)
        for directive, sources in additions.items():
            if directive not in SOURCE_LIST_DIRECTIVES:
                result[directive] = sources
                continue
            existing = result.get(directive) or []
            if list(existing) == [NONE]:
                existing = []
            result[directive] = unique_sources([*existing, *sources])
        return result

    @staticmethod
    def override(base: Directives, additions: Directives) -> dict[str, Any]:
        """Replace each added directive's value outright."""
        DirectiveMerger._check(additions)
        result = DirectiveMerger._copy(base)
        result.update(DirectiveMerger._copy(additions))
        return result

    @staticmethod
    def nonce_additions(base: Directives, nonce: str) -> dict[str, list[str]]:
        """Sources to append so inline code carrying *nonce* is allowed.

        ``'unsafe-inline'`` is kept alongside the nonce for user agents that do
        not understand nonces; CSP2 agents ignore it once a nonce is present.
        """
        sources = [nonce_source(nonce), UNSAFE_INLINE]
        additions = {SCRIPT_SRC: list(sources)}
        if STYLE_SRC in base:
            additions[STYLE_SRC] = list(sources)
        return additions

    @staticmethod
    def _check(additions: Directives) -> None:
        for directive, sources in additions.items():
            if directive not in FLAGS:
                _CSP.validate_directive(directive, sources)

    @staticmethod
    def _copy(config: Directives) -> dict[str, Any]:
        return {
            key: list(value) if isinstance(value, Sequence) and not isinstance(value, str) else value
            for key, value in config.items()
        }
