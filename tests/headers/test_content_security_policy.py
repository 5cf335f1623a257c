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
"""Tests for the Content-Security-Policy spec."""

from __future__ import annotations

import pytest

from headerguard.headers import ContentSecurityPolicy
from headerguard.kernel.exceptions import CSPValidationError, UnknownDirectiveError


class TestContentSecurityPolicyRender:
    spec = ContentSecurityPolicy()

    def test_default_is_report_only_https(self):
        assert self.spec.render(None) == ("Content-Security-Policy-Report-Only", "default-src https:")

    def test_directives_in_insertion_order(self):
        _, value = self.spec.render({"default_src": ["'self'"], "img_src": ["data:"]})
        assert value == "default-src 'self'; img-src data:"

    def test_enforce_selects_header_name(self):
        name, value = self.spec.render(
            {"default_src": ["'self'"], "object_src": ["pleasedontwhitelistflashever.com"], "enforce": True}
        )
        assert name == "Content-Security-Policy"
        assert value == "default-src 'self'; object-src pleasedontwhitelistflashever.com"

    def test_duplicate_sources_are_dropped(self):
        _, value = self.spec.render({"default_src": ["'self'", "a.com", "'self'"]})
        assert value == "default-src 'self' a.com"

    def test_boolean_directives(self):
        _, value = self.spec.render(
            {"default_src": ["https:"], "upgrade_insecure_requests": True, "block_all_mixed_content": False}
        )
        assert value == "default-src https:; upgrade-insecure-requests"

    def test_empty_sandbox(self):
        _, value = self.spec.render({"default_src": ["'self'"], "sandbox": []})
        assert value == "default-src 'self'; sandbox"


class TestContentSecurityPolicyValidation:
    spec = ContentSecurityPolicy()

    def test_valid_config(self):
        self.spec.validate({"default_src": ["'self'"], "script_src": ["mycdn.com"], "enforce": True})

    def test_rejects_string_source_list(self):
        with pytest.raises(CSPValidationError):
            self.spec.validate({"default_src": "123456"})

    def test_rejects_non_mapping(self):
        with pytest.raises(CSPValidationError):
            self.spec.validate("default-src 'self'")

    def test_requires_default_src(self):
        with pytest.raises(CSPValidationError, match="default_src"):
            self.spec.validate({"script_src": ["'self'"]})

    def test_unknown_directive(self):
        with pytest.raises(UnknownDirectiveError) as exc_info:
            self.spec.validate({"default_src": ["'self'"], "scirpt_src": ["'self'"]})
        assert exc_info.value.directive == "scirpt_src"

    def test_rejects_non_boolean_enforce(self):
        with pytest.raises(CSPValidationError):
            self.spec.validate({"default_src": ["'self'"], "enforce": "yes"})

    def test_rejects_source_with_separator(self):
        with pytest.raises(CSPValidationError):
            self.spec.validate({"default_src": ["'self'; script-src *"]})

    def test_rejects_empty_source_list(self):
        with pytest.raises(CSPValidationError):
            self.spec.validate({"default_src": []})
