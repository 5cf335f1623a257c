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
"""X-XSS-Protection — legacy reflected-XSS filter control."""

from __future__ import annotations

import re

from headerguard.headers.base import HeaderKind, ValueHeaderSpec
from headerguard.kernel.exceptions import XXssProtectionValidationError

_VALID_X_XSS = re.compile(r"\A[01](?:; mode=block)?(?:; report=.*)?\Z", re.IGNORECASE)


class XXssProtection(ValueHeaderSpec):
    kind = HeaderKind.X_XSS_PROTECTION
    header_name = "X-XSS-Protection"
    default_value = "1; mode=block"
    error_class = XXssProtectionValidationError
    expected = "0 or 1 with optional '; mode=block' and '; report=<uri>'"

    def is_valid(self, value: str) -> bool:
        return _VALID_X_XSS.match(value) is not None
