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
"""Tests for the single-value header specs."""

from __future__ import annotations

import pytest

from headerguard.headers import (
    OPT_OUT,
    XContentTypeOptions,
    XDownloadOptions,
    XFrameOptions,
    XPermittedCrossDomainPolicies,
    XXssProtection,
)
from headerguard.kernel.exceptions import (
    HeaderValidationError,
    XContentTypeOptionsValidationError,
    XDOValidationError,
    XFOValidationError,
    XPCDPValidationError,
    XXssProtectionValidationError,
)


class TestXFrameOptions:
    spec = XFrameOptions()

    def test_default(self):
        assert self.spec.render(None) == ("X-Frame-Options", "SAMEORIGIN")

    def test_renders_string(self):
        assert self.spec.render("DENY") == ("X-Frame-Options", "DENY")

    def test_renders_value_mapping(self):
        assert self.spec.render({"value": "DENY"}) == ("X-Frame-Options", "DENY")

    def test_opt_out_renders_nothing(self):
        assert self.spec.render(OPT_OUT) is None

    @pytest.mark.parametrize(
        "value", ["SAMEORIGIN", "sameorigin", "DENY", "deny", "ALLOW-FROM:https://example.com", "allow-from https://a.b"]
    )
    def test_accepts_valid_values(self, value):
        self.spec.validate(value)

    @pytest.mark.parametrize(
        "value",
        [
            "NOPE",
            "DENYALL",
            "SAMEORIGIN ",
            "ALLOW-FROM",
            "",
            "ALLOW-FROM:https://x\r\nSet-Cookie: a=b",
            "ALLOW-FROM https://a.b extra",
            "DENY\r\n",
        ],
    )
    def test_rejects_invalid_values(self, value):
        with pytest.raises(XFOValidationError):
            self.spec.validate(value)

    def test_accepts_unset_and_opt_out(self):
        self.spec.validate(None)
        self.spec.validate(OPT_OUT)

    def test_rejects_non_string(self):
        with pytest.raises(XFOValidationError):
            self.spec.validate({"value": 42})


class TestXDownloadOptions:
    spec = XDownloadOptions()

    def test_default(self):
        assert self.spec.render(None) == ("X-Download-Options", "noopen")

    def test_accepts_noopen_any_case(self):
        self.spec.validate("noopen")
        self.spec.validate("NoOpen")
        self.spec.validate({"value": "NOOPEN"})

    def test_rejects_anything_else(self):
        with pytest.raises(XDOValidationError):
            self.spec.validate("lol")


class TestXContentTypeOptions:
    spec = XContentTypeOptions()

    def test_default(self):
        assert self.spec.render(None) == ("X-Content-Type-Options", "nosniff")

    def test_rejects_invalid(self):
        with pytest.raises(XContentTypeOptionsValidationError):
            self.spec.validate("lol")


class TestXXssProtection:
    spec = XXssProtection()

    def test_default(self):
        assert self.spec.render(None) == ("X-XSS-Protection", "1; mode=block")

    @pytest.mark.parametrize("value", ["0", "1", "1; mode=block", "1; mode=block; report=/xss", "1; report=/xss"])
    def test_accepts_valid_values(self, value):
        self.spec.validate(value)

    @pytest.mark.parametrize("value", ["lol", "2", "1;mode=block", "1; mode=allow", "1; report=/xss\r\nX: y"])
    def test_rejects_invalid_values(self, value):
        with pytest.raises(XXssProtectionValidationError):
            self.spec.validate(value)


class TestXPermittedCrossDomainPolicies:
    spec = XPermittedCrossDomainPolicies()

    def test_default(self):
        assert self.spec.render(None) == ("X-Permitted-Cross-Domain-Policies", "none")

    def test_renders_custom_value(self):
        assert self.spec.render("master-only") == ("X-Permitted-Cross-Domain-Policies", "master-only")

    @pytest.mark.parametrize("value", ["all", "none", "master-only", "by-content-type", "by-ftp-filename"])
    def test_accepts_valid_policies(self, value):
        self.spec.validate(value)

    def test_rejects_invalid_policy(self):
        with pytest.raises(XPCDPValidationError):
            self.spec.validate("open")


class TestValidationErrors:
    def test_error_is_tagged_with_kind(self):
        with pytest.raises(HeaderValidationError) as exc_info:
            XFrameOptions().validate("NOPE")
        assert exc_info.value.kind is XFrameOptions.kind
        assert exc_info.value.code == "XFO_INVALID"
        assert "NOPE" in exc_info.value.reason
