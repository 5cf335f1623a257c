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
"""HeaderGuard Headers — one HeaderSpec per security response header."""

from __future__ import annotations

from types import MappingProxyType

from headerguard.headers.base import (
    OPT_OUT,
    Header,
    HeaderConfigValue,
    HeaderKind,
    HeaderSpec,
    OptOut,
)
from headerguard.headers.content_security_policy import ContentSecurityPolicy
from headerguard.headers.public_key_pins import PublicKeyPins
from headerguard.headers.strict_transport_security import StrictTransportSecurity
from headerguard.headers.x_content_type_options import XContentTypeOptions
from headerguard.headers.x_download_options import XDownloadOptions
from headerguard.headers.x_frame_options import XFrameOptions
from headerguard.headers.x_permitted_cross_domain_policies import XPermittedCrossDomainPolicies
from headerguard.headers.x_xss_protection import XXssProtection

ALL_HEADER_SPECS: tuple[HeaderSpec, ...] = (
    ContentSecurityPolicy(),
    StrictTransportSecurity(),
    PublicKeyPins(),
    XContentTypeOptions(),
    XDownloadOptions(),
    XFrameOptions(),
    XPermittedCrossDomainPolicies(),
    XXssProtection(),
)
"""Every header spec, in the order headers are resolved."""

_SPECS_BY_KIND = MappingProxyType({spec.kind: spec for spec in ALL_HEADER_SPECS})

VALIDATION_ORDER: tuple[HeaderKind, ...] = (
    HeaderKind.HSTS,
    HeaderKind.CSP,
    HeaderKind.X_FRAME_OPTIONS,
    HeaderKind.X_CONTENT_TYPE_OPTIONS,
    HeaderKind.X_XSS_PROTECTION,
    HeaderKind.X_DOWNLOAD_OPTIONS,
    HeaderKind.X_PERMITTED_CROSS_DOMAIN_POLICIES,
    HeaderKind.HPKP,
)

SSL_ONLY_KINDS: frozenset[HeaderKind] = frozenset({HeaderKind.HSTS, HeaderKind.HPKP})
"""Headers that are suppressed on requests over plain HTTP."""


def spec_for(kind: HeaderKind) -> HeaderSpec:
    """Return the HeaderSpec registered for *kind*."""
    return _SPECS_BY_KIND[kind]


__all__ = [
    "ALL_HEADER_SPECS",
    "ContentSecurityPolicy",
    "Header",
    "HeaderConfigValue",
    "HeaderKind",
    "HeaderSpec",
    "OPT_OUT",
    "OptOut",
    "PublicKeyPins",
    "SSL_ONLY_KINDS",
    "StrictTransportSecurity",
    "VALIDATION_ORDER",
    "XContentTypeOptions",
    "XDownloadOptions",
    "XFrameOptions",
    "XPermittedCrossDomainPolicies",
    "XXssProtection",
    "spec_for",
]
