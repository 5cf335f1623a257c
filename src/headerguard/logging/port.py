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
"""LoggingPort — what the CLI and embedding apps need from a logging backend.

The library itself only emits records through ``logging.getLogger(__name__)``.
A port implementation decides how those records are rendered, and lets a
caller raise or lower the level of one logger tree (e.g. ``headerguard``)
without touching the rest of the configuration.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from headerguard.core.config import Config


@runtime_checkable
class LoggingPort(Protocol):
    """Logging backend used by :mod:`headerguard.cli`."""

    def configure(self, config: Config) -> None:
        """Apply the ``headerguard.logging`` section of *config*."""
        ...

    def get_logger(self, name: str) -> Any:
        """Return a logger that accepts structured key-value events."""
        ...

    def set_level(self, name: str, level: str) -> None:
        """Override the level of logger *name* after :meth:`configure`."""
        ...
