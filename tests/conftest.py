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
"""Shared fixtures."""

from __future__ import annotations

import logging

import pytest

from headerguard.policy.request_context import RequestPolicyContext


@pytest.fixture(autouse=True)
def _isolate_global_state():
    """Undo root logger changes made by StructlogAdapter and drop any request context."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    package_level = logging.getLogger("headerguard").level
    yield
    logging.getLogger("headerguard").setLevel(package_level)
    root.handlers = handlers
    root.setLevel(level)
    RequestPolicyContext.clear()
