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
"""Public-Key-Pins — HTTP public key pinning.

HPKP is opt-in only: a wrong pin set locks users out of the domain for
``max_age`` seconds, so there is no default value.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from typing import Any

from headerguard.headers.base import OPT_OUT, Header, HeaderConfigValue, HeaderKind, HeaderSpec
from headerguard.kernel.exceptions import PublicKeyPinsValidationError

MIN_PINS = 2

_UNQUOTABLE = re.compile(r"[\x00-\x1f\x7f\"]")


class PublicKeyPins(HeaderSpec):
    """Renders ``max-age``, pins in order, ``report-uri`` and ``includeSubDomains``.

    Pins may be given as bare digests or as ``{"sha256": digest}`` mappings.
    Without ``enforce: true`` the report-only header is emitted.
    """

    kind = HeaderKind.HPKP
    header_name = "Public-Key-Pins"
    report_only_header_name = "Public-Key-Pins-Report-Only"
    default_value = None
    error_class = PublicKeyPinsValidationError

    def _render(self, config: None | str | Mapping[str, Any]) -> Header | None:
        if not isinstance(config, Mapping):
            return None
        parts = [f"max-age={config['max_age']}"]
        parts.extend(f'pin-sha256="{digest}"' for digest in self.digests(config.get("pins", ())))
        if config.get("report_uri"):
            parts.append(f'report-uri="{config["report_uri"]}"')
        if config.get("include_subdomains"):
            parts.append("includeSubDomains")
        name = self.header_name if config.get("enforce") else self.report_only_header_name
        return name, "; ".join(parts)

    def validate(self, config: HeaderConfigValue) -> None:
        if config is None or config is OPT_OUT:
            return
        if not isinstance(config, Mapping):
            self.fail(f"configuration must be a mapping, got {config!r}")

        max_age = config.get("max_age")
        if max_age is None:
            self.fail("max_age is a required directive")
        if isinstance(max_age, bool) or not isinstance(max_age, int) or max_age < 0:
            self.fail(f"max_age must be a non-negative integer, got {max_age!r}")

        pins = config.get("pins")
        if not isinstance(pins, Sequence) or isinstance(pins, str) or len(pins) < MIN_PINS:
            self.fail(f"a minimum of {MIN_PINS} pins is required")
        for pin in pins:
            digest = pin.get("sha256") if isinstance(pin, Mapping) else pin
            if not isinstance(digest, str) or not digest or _UNQUOTABLE.search(digest):
                self.fail(f"pin must be a sha256 digest string, got {pin!r}")

        report_uri = config.get("report_uri")
        if report_uri is not None and (not isinstance(report_uri, str) or _UNQUOTABLE.search(report_uri)):
            self.fail(f"report_uri must be a string without quotes or control characters, got {report_uri!r}")

    @staticmethod
    def digests(pins: Sequence[Any]) -> list[str]:
        return [pin["sha256"] if isinstance(pin, Mapping) else pin for pin in pins]
