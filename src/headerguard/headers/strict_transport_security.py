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
"""Strict-Transport-Security — tells browsers to only use HTTPS."""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from headerguard.headers.base import OPT_OUT, Header, HeaderConfigValue, HeaderKind, HeaderSpec
from headerguard.kernel.exceptions import STSValidationError

HSTS_MAX_AGE = 631138519  # twenty years

_VALID_STS = re.compile(r"\Amax-age=\d+(?:; includeSubdomains)?(?:; preload)?\Z", re.IGNORECASE)


class StrictTransportSecurity(HeaderSpec):
    """Accepts a raw header string or ``{max_age, include_subdomains, preload}``."""

    kind = HeaderKind.HSTS
    header_name = "Strict-Transport-Security"
    default_value = f"max-age={HSTS_MAX_AGE}"
    error_class = STSValidationError

    def _render(self, config: None | str | Mapping[str, Any]) -> Header:
        if config is None:
            return self.header_name, self.default_value
        if isinstance(config, Mapping):
            return self.header_name, self._build(config)
        return self.header_name, config

    def validate(self, config: HeaderConfigValue) -> None:
        if config is None or config is OPT_OUT:
            return
        if isinstance(config, Mapping):
            max_age = config.get("max_age")
            if isinstance(max_age, bool) or not isinstance(max_age, int) or max_age < 0:
                self.fail(f"max_age must be a non-negative integer, got {max_age!r}")
            return
        if not isinstance(config, str) or not _VALID_STS.match(config):
            self.fail(f"value must match 'max-age=<seconds>[; includeSubDomains][; preload]', got {config!r}")

    @staticmethod
    def _build(config: Mapping[str, Any]) -> str:
        parts = [f"max-age={config['max_age']}"]
        if config.get("include_subdomains"):
            parts.append("includeSubDomains")
        if config.get("preload"):
            parts.append("preload")
        return "; ".join(parts)
