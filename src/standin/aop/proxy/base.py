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
"""Shared stand-in plumbing — advised state, dispatch and proxy introspection."""

from __future__ import annotations

import functools
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from standin.aop.chain import AdviceChain
from standin.aop.invocation import MethodInvocation
from standin.kernel.exceptions import TargetInvocationError

PROXY_ATTR = "__standin_proxy__"
ADVISED_ATTR = "_standin_advised"

CONTRACT = "contract"
SUBCLASS = "subclass"


@dataclass(frozen=True)
class Advised:
    """Everything a stand-in needs to route a call: the target and its chain."""

    target: Any
    chain: AdviceChain
    wrap_target_errors: bool = False

    @property
    def target_type(self) -> type:
        return type(self.target)


@runtime_checkable
class ProxyStrategy(Protocol):
    """A way of building stand-ins for a family of target shapes."""

    name: str

    def supports(self, target: Any) -> bool: ...
    def create(self, advised: Advised) -> Any: ...


def dispatch(advised: Advised, method_name: str, args: tuple, kwargs: dict[str, Any]) -> Any:
    """Route one call through the advice chain with a fresh invocation."""
    invocation = MethodInvocation(
        target=advised.target,
        method_name=method_name,
        args=args,
        kwargs=kwargs,
        declaring_type=advised.target_type,
    )
    if not advised.wrap_target_errors:
        return advised.chain.invoke(invocation)
    try:
        return advised.chain.invoke(invocation)
    except Exception as exc:
        if invocation.target_exception is exc:
            raise TargetInvocationError(method_name, exc) from exc
        raise


def _concrete(method: Callable[..., Any]) -> Callable[..., Any]:
    """Drop the abstract flag copied over from a contract declaration."""
    method.__dict__.pop("__isabstractmethod__", None)
    return method


def intercepting_method(name: str, original: Callable[..., Any]) -> Callable[..., Any]:
    """Build a method that sends every call through the stand-in's chain."""

    @functools.wraps(original)
    def method(self: Any, *args: Any, **kwargs: Any) -> Any:
        return dispatch(getattr(self, ADVISED_ATTR), name, args, kwargs)

    return _concrete(method)


def delegating_method(name: str, original: Callable[..., Any]) -> Callable[..., Any]:
    """Build a method that calls the target's implementation without interception."""

    @functools.wraps(original)
    def method(self: Any, *args: Any, **kwargs: Any) -> Any:
        target = getattr(self, ADVISED_ATTR).target
        return getattr(type(target), name)(target, *args, **kwargs)

    return _concrete(method)


class _ClassLevelOperation:
    """Static or class method on a stand-in.

    Looked up on an instance, it returns a callable that sends the call
    through that stand-in's chain.  Looked up on the stand-in class, it
    returns the target type's own callable.
    """

    def __init__(self, name: str, target_type: type) -> None:
        self._name = name
        self._target_type = target_type

    def __get__(self, instance: Any, owner: type | None = None) -> Any:
        original = getattr(self._target_type, self._name)
        if instance is None:
            return original
        advised = object.__getattribute__(instance, ADVISED_ATTR)
        name = self._name

        @functools.wraps(original)
        def call(*args: Any, **kwargs: Any) -> Any:
            return dispatch(advised, name, args, kwargs)

        return call


class _DelegatingAttribute:
    """Plain class attribute whose instance reads come from the target."""

    def __init__(self, name: str, default: Any) -> None:
        self._name = name
        self._default = default

    def __get__(self, instance: Any, owner: type | None = None) -> Any:
        if instance is None:
            return self._default
        return getattr(object.__getattribute__(instance, ADVISED_ATTR).target, self._name)


def intercepting_class_level(name: str, target_type: type) -> Any:
    """Build a static/class method slot that intercepts calls made through a stand-in."""
    return _ClassLevelOperation(name, target_type)


def delegating_attribute(name: str, default: Any) -> Any:
    """Build a class attribute slot that reads the target's value on instances."""
    return _DelegatingAttribute(name, default)


def delegating_property(name: str) -> property:
    def fget(self: Any) -> Any:
        return getattr(getattr(self, ADVISED_ATTR).target, name)

    def fset(self: Any, value: Any) -> None:
        setattr(getattr(self, ADVISED_ATTR).target, name, value)

    return property(fget, fset)


def is_stand_in(obj: Any) -> bool:
    """Return ``True`` if *obj* was produced by one of the proxy strategies."""
    return getattr(type(obj), PROXY_ATTR, None) is not None


def proxy_strategy(obj: Any) -> str | None:
    """Name of the strategy that built *obj* (``"contract"`` / ``"subclass"``), or ``None``."""
    return getattr(type(obj), PROXY_ATTR, None)


def get_target(obj: Any) -> Any:
    """Unwrap one stand-in layer; raw objects are returned as-is."""
    if not is_stand_in(obj):
        return obj
    return object.__getattribute__(obj, ADVISED_ATTR).target
