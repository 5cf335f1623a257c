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
"""HeaderGuard — layered security response header policies.

Computes Content-Security-Policy, Strict-Transport-Security, Public-Key-Pins,
X-Frame-Options, X-XSS-Protection, X-Content-Type-Options,
X-Download-Options and X-Permitted-Cross-Domain-Policies for each request
from a process-wide policy and per-request overrides.
"""

from headerguard.headers import OPT_OUT, HeaderKind
from headerguard.kernel.exceptions import (
    DuplicateOverrideError,
    HeaderGuardException,
    HeaderValidationError,
    UnknownDirectiveError,
)
from headerguard.policy import (
    Configuration,
    DirectiveMerger,
    PolicyConfiguration,
    PolicyRequest,
    PolicyResolver,
    RequestPolicyContext,
)

__version__ = "0.1.0"

__all__ = [
    "Configuration",
    "DirectiveMerger",
    "DuplicateOverrideError",
    "HeaderGuardException",
    "HeaderKind",
    "HeaderValidationError",
    "OPT_OUT",
    "PolicyConfiguration",
    "PolicyRequest",
    "PolicyResolver",
    "RequestPolicyContext",
    "UnknownDirectiveError",
    "__version__",
]
