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
"""Interceptor ordering — @order decorator and precedence constants."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

T = TypeVar("T")

HIGHEST_PRECEDENCE: int = -(2**31)
LOWEST_PRECEDENCE: int = 2**31 - 1

ORDER_ATTR = "__standin_order__"


def order(value: int) -> Callable[[T], T]:
    """Set the chain position of an interceptor class or function.

    Lower value = outer position (runs first on the way in, last on the
    way out).  Undecorated interceptors default to 0; ties keep
    registration order.
    """

    def decorator(obj: T) -> T:
        setattr(obj, ORDER_ATTR, value)
        return obj

    return decorator


def get_order(obj: Any) -> int:
    """Get the order value for an interceptor (instance, class or function), defaulting to 0."""
    return getattr(obj, ORDER_ATTR, 0)
