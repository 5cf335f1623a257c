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
"""X-Frame-Options — clickjacking protection."""

from __future__ import annotations

import re

from headerguard.headers.base import HeaderKind, ValueHeaderSpec
from headerguard.kernel.exceptions import XFOValidationError

SAMEORIGIN = "SAMEORIGIN"
DENY = "DENY"
ALLOW_FROM = "ALLOW-FROM"

_VALID_XFO = re.compile(r"\A(?:SAMEORIGIN|DENY|ALLOW-FROM[: ]\S+)\Z", re.IGNORECASE)


class XFrameOptions(ValueHeaderSpec):
    kind = HeaderKind.X_FRAME_OPTIONS
    header_name = "X-Frame-Options"
    default_value = SAMEORIGIN
    error_class = XFOValidationError
    expected = "SAMEORIGIN, DENY or ALLOW-FROM:<origin>"

    def is_valid(self, value: str) -> bool:
        return _VALID_XFO.match(value) is not None
