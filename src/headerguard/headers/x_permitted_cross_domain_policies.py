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
"""X-Permitted-Cross-Domain-Policies — Flash/PDF cross-domain policy files."""

from __future__ import annotations

from headerguard.headers.base import HeaderKind, ValueHeaderSpec
from headerguard.kernel.exceptions import XPCDPValidationError

VALID_POLICIES: tuple[str, ...] = ("all", "none", "master-only", "by-content-type", "by-ftp-filename")


class XPermittedCrossDomainPolicies(ValueHeaderSpec):
    kind = HeaderKind.X_PERMITTED_CROSS_DOMAIN_POLICIES
    header_name = "X-Permitted-Cross-Domain-Policies"
    default_value = "none"
    error_class = XPCDPValidationError
    expected = "one of " + ", ".join(VALID_POLICIES)

    def is_valid(self, value: str) -> bool:
        return value in VALID_POLICIES
