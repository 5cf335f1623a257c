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
"""Tests for the Public-Key-Pins spec."""

from __future__ import annotations

import pytest

from headerguard.headers import OPT_OUT, PublicKeyPins
from headerguard.kernel.exceptions import PublicKeyPinsValidationError

HPKP_CONFIG = {
    "max_age": 1000000,
    "include_subdomains": True,
    "report_uri": "//example.com/uri-directive",
    "pins": ["abc", "123"],
}


class TestPublicKeyPinsRender:
    spec = PublicKeyPins()

    def test_field_order(self):
        _, value = self.spec.render(HPKP_CONFIG)
        assert value == (
            'max-age=1000000; pin-sha256="abc"; pin-sha256="123"; '
            'report-uri="//example.com/uri-directive"; includeSubDomains'
        )

    def test_report_only_unless_enforced(self):
        name, _ = self.spec.render(HPKP_CONFIG)
        assert name == "Public-Key-Pins-Report-Only"

    def test_enforced_header_name(self):
        name, _ = self.spec.render({**HPKP_CONFIG, "enforce": True})
        assert name == "Public-Key-Pins"

    def test_accepts_sha256_mappings(self):
        _, value = self.spec.render({"max_age": 10, "pins": [{"sha256": "abc"}, {"sha256": "123"}]})
        assert value == 'max-age=10; pin-sha256="abc"; pin-sha256="123"'

    def test_no_default(self):
        assert self.spec.render(None) is None
        assert self.spec.render(OPT_OUT) is None


class TestPublicKeyPinsValidation:
    spec = PublicKeyPins()

    def test_valid_config(self):
        self.spec.validate(HPKP_CONFIG)

    def test_rejects_string(self):
        with pytest.raises(PublicKeyPinsValidationError):
            self.spec.validate("lol")

    def test_requires_max_age(self):
        with pytest.raises(PublicKeyPinsValidationError, match="max_age"):
            self.spec.validate({"pins": ["abc", "123"]})

    def test_rejects_non_numeric_max_age(self):
        with pytest.raises(PublicKeyPinsValidationError):
            self.spec.validate({"max_age": "forever", "pins": ["abc", "123"]})

    def test_requires_two_pins(self):
        with pytest.raises(PublicKeyPinsValidationError, match="pins"):
            self.spec.validate({"max_age": 10, "pins": ["abc"]})

    def test_rejects_empty_digest(self):
        with pytest.raises(PublicKeyPinsValidationError):
            self.spec.validate({"max_age": 10, "pins": ["abc", {"sha256": ""}]})

    @pytest.mark.parametrize("digest", ['b"\r\nX: y', 'abc"', "abc\n"])
    def test_rejects_unquotable_digest(self, digest):
        with pytest.raises(PublicKeyPinsValidationError, match="pin"):
            self.spec.validate({"max_age": 10, "pins": ["abc", digest]})

    @pytest.mark.parametrize("report_uri", ["x\r\nSet-Cookie: a=b", 'https://r.example/"'])
    def test_rejects_unquotable_report_uri(self, report_uri):
        with pytest.raises(PublicKeyPinsValidationError, match="report_uri"):
            self.spec.validate({**HPKP_CONFIG, "report_uri": report_uri})
