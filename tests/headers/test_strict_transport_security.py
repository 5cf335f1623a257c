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
"""Tests for the Strict-Transport-Security spec."""

from __future__ import annotations

import pytest

from headerguard.headers import StrictTransportSecurity
from headerguard.kernel.exceptions import STSValidationError


class TestStrictTransportSecurity:
    spec = StrictTransportSecurity()

    def test_default_is_twenty_years(self):
        assert self.spec.render(None) == ("Strict-Transport-Security", "max-age=631138519")

    def test_renders_string(self):
        assert self.spec.render("max-age=123456") == ("Strict-Transport-Security", "max-age=123456")

    def test_renders_structured_config(self):
        header = self.spec.render({"max_age": 86400, "include_subdomains": True, "preload": True})
        assert header == ("Strict-Transport-Security", "max-age=86400; includeSubDomains; preload")

    @pytest.mark.parametrize(
        "value",
        ["max-age=123456", "max-age=11111111; includeSubDomains; preload", "MAX-AGE=1; includesubdomains", "max-age=0"],
    )
    def test_accepts_valid_values(self, value):
        self.spec.validate(value)

    @pytest.mark.parametrize("value", ["lol", "max-age=", "max-age=-1", "max-age=10; preload; includeSubDomains"])
    def test_rejects_invalid_values(self, value):
        with pytest.raises(STSValidationError):
            self.spec.validate(value)

    def test_rejects_structured_config_without_max_age(self):
        with pytest.raises(STSValidationError):
            self.spec.validate({"include_subdomains": True})
