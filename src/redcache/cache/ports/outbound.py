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
"""Response cache protocol."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ResponseCache(Protocol):
    """Cache of response bodies keyed by request path.

    ``response`` is any object with a ``status_code`` attribute and,
    optionally, the originating ``request``.
    """

    @property
    def connected(self) -> bool: ...

    async def fetch(self, path: str, request: Any = None) -> Any | None: ...

    async def put(self, path: str, body: str | bytes, response: Any = None) -> None: ...
