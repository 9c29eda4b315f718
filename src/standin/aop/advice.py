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
"""Advice adapters — turn single-point callbacks into method interceptors."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from standin.aop.invocation import MethodInvocation
from standin.aop.ordering import ORDER_ATTR

Callback = Callable[[MethodInvocation], Any]
Proceed = Callable[[], Any]

ADVICE_TYPE_ATTR = "__standin_advice_type__"


def _adopt(interceptor: Any, callback: Callback, advice_type: str) -> Any:
    """Carry the callback's name and order onto the generated interceptor."""
    interceptor.__name__ = f"{advice_type}:{getattr(callback, '__name__', type(callback).__name__)}"
    interceptor.__qualname__ = interceptor.__name__
    setattr(interceptor, ADVICE_TYPE_ATTR, advice_type)
    if hasattr(callback, ORDER_ATTR):
        setattr(interceptor, ORDER_ATTR, getattr(callback, ORDER_ATTR))
    return interceptor


def before(callback: Callback) -> Callable[[MethodInvocation, Proceed], Any]:
    """Run *callback* before the rest of the chain."""

    def interceptor(invocation: MethodInvocation, proceed: Proceed) -> Any:
        callback(invocation)
        return proceed()

    return _adopt(interceptor, callback, "before")


def after_returning(callback: Callback) -> Callable[[MethodInvocation, Proceed], Any]:
    """Run *callback* after a successful call.

    ``return_value`` holds the real operation's result; it stays ``None`` when an
    inner interceptor answered without proceeding.
    """

    def interceptor(invocation: MethodInvocation, proceed: Proceed) -> Any:
        result = proceed()
        callback(invocation)
        return result

    return _adopt(interceptor, callback, "after_returning")


def after_throwing(callback: Callback) -> Callable[[MethodInvocation, Proceed], Any]:
    """Run *callback* when the call fails, then re-raise.

    ``exception`` holds the real operation's failure; it stays ``None`` when the
    failure came from an inner interceptor.
    """

    def interceptor(invocation: MethodInvocation, proceed: Proceed) -> Any:
        try:
            return proceed()
        except Exception:
            callback(invocation)
            raise

    return _adopt(interceptor, callback, "after_throwing")


def after(callback: Callback) -> Callable[[MethodInvocation, Proceed], Any]:
    """Run *callback* after the call on every exit path."""

    def interceptor(invocation: MethodInvocation, proceed: Proceed) -> Any:
        try:
            return proceed()
        finally:
            callback(invocation)

    return _adopt(interceptor, callback, "after")
