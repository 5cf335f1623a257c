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
"""PolicyConfiguration — the validated, process-wide header configuration.

A :class:`PolicyConfiguration` is immutable once built: it validates every
header kind on construction and caches the rendered default header for each
kind that is not opted out. :class:`Configuration` holds the current policy
and swaps it atomically when reconfigured, so concurrent readers always see
a complete, validated policy.

Usage::

    configuration = Configuration()

    def setup(config):
        config.x_frame_options = "DENY"
        config.csp = {"default_src": ["'self'"], "enforce": True}

    configuration.configure(setup)
"""

from __future__ import annotations

import copy
import logging
import threading
from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from headerguard.headers import ALL_HEADER_SPECS, OPT_OUT, VALIDATION_ORDER, spec_for
from headerguard.headers.base import Header, HeaderConfigValue, HeaderKind
from headerguard.kernel.exceptions import ConfigurationException, HeaderValidationError

if TYPE_CHECKING:
    from headerguard.core.config import Config

logger = logging.getLogger(__name__)

HEADERS_PREFIX = "headerguard.headers"
"""Configuration section holding one entry per header kind."""

_OPT_OUT_MARKERS = ("false", "opt_out", "optout", "optout_of_protection")


def _initial_values() -> dict[HeaderKind, HeaderConfigValue]:
    values: dict[HeaderKind, HeaderConfigValue] = {kind: None for kind in HeaderKind}
    # HPKP is the only header without a safe default.
    values[HeaderKind.HPKP] = OPT_OUT
    return values


class PolicyConfiguration:
    """Validated configuration value per header kind plus cached default headers.

    Raises the header-specific :class:`HeaderValidationError` for the first
    invalid kind, checked in :data:`VALIDATION_ORDER`.
    """

    def __init__(self, values: Mapping[HeaderKind, HeaderConfigValue] | None = None) -> None:
        merged = _initial_values()
        merged.update(values or {})
        self._values: Mapping[HeaderKind, HeaderConfigValue] = MappingProxyType(copy.deepcopy(merged))
        self.validate()
        self._cached: Mapping[HeaderKind, Header] = MappingProxyType(self._render_defaults())

    def get(self, kind: HeaderKind) -> HeaderConfigValue:
        """Return the configured value for *kind* (``None`` when unset).

        The returned value is shared; callers must copy before modifying it.
        """
        return self._values[kind]

    def is_opted_out(self, kind: HeaderKind) -> bool:
        return self._values[kind] is OPT_OUT

    def cached_header(self, kind: HeaderKind) -> Header | None:
        """The pre-rendered header for *kind*, or ``None`` if it renders nothing."""
        return self._cached.get(kind)

    @property
    def default_headers(self) -> dict[str, str]:
        """Header name to value for every kind that renders by default."""
        return {name: value for name, value in self._cached.values()}

    def validate(self) -> None:
        """Validate every header kind, raising on the first violation."""
        for kind in VALIDATION_ORDER:
            spec_for(kind).validate(self._values[kind])

    def _render_defaults(self) -> dict[HeaderKind, Header]:
        cached: dict[HeaderKind, Header] = {}
        for spec in ALL_HEADER_SPECS:
            header = spec.render(self._values[spec.kind])
            if header is not None:
                cached[spec.kind] = header
        return cached

    @classmethod
    def from_config(cls, config: Config) -> PolicyConfiguration:
        """Build a policy from the ``headerguard.headers`` configuration section.

        A value of ``false`` or ``"opt_out"`` opts the header out.
        """
        known = {kind.value for kind in HeaderKind}
        for key in config.get_section(HEADERS_PREFIX):
            if key not in known:
                raise ConfigurationException(
                    f"Unknown header '{key}' under '{HEADERS_PREFIX}'",
                    code="UNKNOWN_HEADER",
                    context={"key": key},
                )

        values: dict[HeaderKind, HeaderConfigValue] = {}
        for kind in HeaderKind:
            raw = config.get(f"{HEADERS_PREFIX}.{kind.value}")
            if raw is None:
                continue
            values[kind] = OPT_OUT if _is_opt_out_marker(raw) else raw
        return cls(values)

    def __repr__(self) -> str:
        configured = {kind.value: value for kind, value in self._values.items() if value is not None}
        return f"PolicyConfiguration({configured!r})"


def _is_opt_out_marker(value: Any) -> bool:
    if isinstance(value, bool):
        return value is False
    return isinstance(value, str) and value.lower() in _OPT_OUT_MARKERS


class PolicyConfigurationBuilder:
    """Mutable staging area handed to a ``configure`` block.

    One attribute per header kind, named after its configuration key.
    """

    def __init__(self) -> None:
        self.csp: HeaderConfigValue = None
        self.hsts: HeaderConfigValue = None
        self.hpkp: HeaderConfigValue = OPT_OUT
        self.x_frame_options: HeaderConfigValue = None
        self.x_xss_protection: HeaderConfigValue = None
        self.x_content_type_options: HeaderConfigValue = None
        self.x_download_options: HeaderConfigValue = None
        self.x_permitted_cross_domain_policies: HeaderConfigValue = None

    def build(self) -> PolicyConfiguration:
        return PolicyConfiguration({kind: getattr(self, kind.value) for kind in HeaderKind})


class Configuration:
    """Holds the current :class:`PolicyConfiguration` and replaces it atomically.

    Each ``configure`` call starts from a fresh builder; nothing carries over
    from the previous configuration. If validation fails, the current policy
    is left untouched.
    """

    def __init__(self, policy: PolicyConfiguration | None = None) -> None:
        self._policy = policy or PolicyConfiguration()
        self._lock = threading.Lock()

    @property
    def current(self) -> PolicyConfiguration:
        return self._policy

    def configure(self, block: Callable[[PolicyConfigurationBuilder], None]) -> PolicyConfiguration:
        """Run *block* against a fresh builder, validate, then publish the result."""
        builder = PolicyConfigurationBuilder()
        block(builder)
        return self.replace(builder.build)

    def load(self, config: Config) -> PolicyConfiguration:
        """Replace the current policy with one read from *config*."""
        return self.replace(lambda: PolicyConfiguration.from_config(config))

    def replace(self, factory: Callable[[], PolicyConfiguration]) -> PolicyConfiguration:
        try:
            policy = factory()
        except HeaderValidationError as exc:
            logger.warning("Rejected header configuration: %s", exc)
            raise
        with self._lock:
            self._policy = policy
        logger.debug("Header configuration applied: %d default headers", len(policy.default_headers))
        return policy

    def validate(self) -> None:
        """Re-validate the current policy."""
        self._policy.validate()
