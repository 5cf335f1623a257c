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
"""X-Content-Type-Options — disables MIME sniffing."""

from __future__ import annotations

from headerguard.headers.base import HeaderKind, ValueHeaderSpec
from headerguard.kernel.exceptions import XContentTypeOptionsValidationError

NOSNIFF = "nosniff"


class XContentTypeOptions(ValueHeaderSpec):
    kind = HeaderKind.X_CONTENT_TYPE_OPTIONS
    header_name = "X-Content-Type-Options"
    default_value = NOSNIFF
    error_class = XContentTypeOptionsValidationError
    expected = "'nosniff'"

    def is_valid(self, value: str) -> bool:
        return value.lower() == NOSNIFF
