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
"""ObjectPostProcessor — hooks into object construction lifecycle."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ObjectPostProcessor(Protocol):
    """Hook into object initialization.

    An object-lifecycle manager calls these for every object it creates,
    before handing the object to any caller:
    - ``before_init``: called before the object's own initialization hooks
    - ``after_init``: called after them; may return a replacement object
    """

    def before_init(self, bean: Any, bean_name: str) -> Any:
        """Called before initialization. May return a replacement object."""
        ...

    def after_init(self, bean: Any, bean_name: str) -> Any:
        """Called after initialization. May return a replacement object."""
        ...
