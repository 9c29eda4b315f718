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
"""Subclass-based stand-ins — generated subclasses of the target's concrete type."""

from __future__ import annotations

import inspect
import threading
import types
from typing import Any

import structlog

from standin.aop.markers import is_sealed
from standin.aop.proxy.base import (
    ADVISED_ATTR,
    PROXY_ATTR,
    SUBCLASS,
    Advised,
    delegating_method,
    intercepting_class_level,
    intercepting_method,
)
from standin.aop.registry import DEFAULT_REGISTRY, MarkerRegistry
from standin.config.properties import SealedOperationPolicy
from standin.kernel.exceptions import UnsupportedTargetError

logger = structlog.get_logger("standin.aop.proxy")


class SubclassProxyStrategy:
    """Builds stand-ins whose class is a generated subclass of the target's type.

    Every public method found along the target's MRO, static and class
    methods included, is overridden with an intercepting one.
    ``proceed()`` runs the original implementation on the captured target,
    never on the stand-in, so calls the target makes on itself are not
    intercepted again.  Attribute reads and writes that are not resolved by
    the class are forwarded to the target, so the stand-in shares the
    target's state instead of holding an uninitialised copy.

    Operations declared with :func:`typing.final` are sealed: they are
    delegated to the target without interception.  When a sealed operation
    is also marked, *sealed_operations* decides what happens:

    * ``"pass-through"``: delegate silently (debug log only).
    * ``"warn"``: delegate and log a warning.
    * ``"fail"``: raise :class:`UnsupportedTargetError`.

    Types declared with :func:`typing.final` cannot be subclassed at all.
    """

    name = SUBCLASS

    def __init__(
        self,
        registry: MarkerRegistry | None = None,
        sealed_operations: SealedOperationPolicy = "pass-through",
    ) -> None:
        self._registry = registry or DEFAULT_REGISTRY
        self._sealed_operations = sealed_operations
        self._classes: dict[type, type] = {}
        self._lock = threading.Lock()

    def supports(self, target: Any) -> bool:
        return not vars(type(target)).get("__final__", False)

    def create(self, advised: Advised) -> Any:
        target_type = advised.target_type
        if not self.supports(advised.target):
            raise UnsupportedTargetError(
                f"{target_type.__qualname__} is declared final and cannot be subclassed",
                target_type=target_type,
            )
        proxy_cls = self.proxy_class_for(target_type)
        try:
            instance = object.__new__(proxy_cls)
        except TypeError as exc:
            raise UnsupportedTargetError(
                f"Cannot allocate a subclass stand-in for {target_type.__qualname__}: {exc}",
                target_type=target_type,
            ) from exc
        object.__setattr__(instance, ADVISED_ATTR, advised)
        return instance

    def proxy_class_for(self, target_type: type) -> type:
        with self._lock:
            proxy_cls = self._classes.get(target_type)
            if proxy_cls is None:
                proxy_cls = self._build_class(target_type)
                self._classes[target_type] = proxy_cls
        return proxy_cls

    def _build_class(self, target_type: type) -> type:
        namespace: dict[str, Any] = {}
        sealed: list[str] = []

        for attr_name in dir(target_type):
            if attr_name.startswith("_"):
                continue
            member = inspect.getattr_static(target_type, attr_name)
            class_level = isinstance(member, (staticmethod, classmethod))
            if not (class_level or inspect.isfunction(member)):
                continue
            if is_sealed(member):
                self._check_sealed(target_type, attr_name, sealed)
                # sealed static and class methods are inherited as they are
                if not class_level:
                    namespace[attr_name] = delegating_method(attr_name, member)
            elif class_level:
                namespace[attr_name] = intercepting_class_level(attr_name, target_type)
            else:
                namespace[attr_name] = intercepting_method(attr_name, member)

        def __getattr__(self: Any, attr_name: str) -> Any:
            if attr_name == ADVISED_ATTR:
                raise AttributeError(attr_name)
            return getattr(object.__getattribute__(self, ADVISED_ATTR).target, attr_name)

        def __setattr__(self: Any, attr_name: str, value: Any) -> None:
            setattr(object.__getattribute__(self, ADVISED_ATTR).target, attr_name, value)

        def __delattr__(self: Any, attr_name: str) -> None:
            delattr(object.__getattribute__(self, ADVISED_ATTR).target, attr_name)

        namespace.update(
            {
                "__getattr__": __getattr__,
                "__setattr__": __setattr__,
                "__delattr__": __delattr__,
                "__module__": target_type.__module__,
                PROXY_ATTR: SUBCLASS,
            }
        )

        proxy_cls = types.new_class(
            f"{target_type.__name__}SubclassProxy",
            (target_type,),
            exec_body=lambda ns: ns.update(namespace),
        )
        logger.debug(
            "proxy.class_generated",
            strategy=SUBCLASS,
            target_type=target_type.__qualname__,
            sealed=sealed,
        )
        return proxy_cls

    def _check_sealed(self, target_type: type, attr_name: str, sealed: list[str]) -> None:
        sealed.append(attr_name)
        if not self._registry.is_marked(target_type, attr_name):
            return
        if self._sealed_operations == "fail":
            raise UnsupportedTargetError(
                f"{target_type.__qualname__}.{attr_name} is marked for interception but declared final",
                target_type=target_type,
            )
        log = logger.warning if self._sealed_operations == "warn" else logger.debug
        log(
            "proxy.sealed_operation",
            target_type=target_type.__qualname__,
            operation=attr_name,
            intercepted=False,
        )
