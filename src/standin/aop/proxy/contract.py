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
"""Contract-based stand-ins — adapters implementing the target's capability contracts."""

from __future__ import annotations

import inspect
import threading
import types
from typing import Any

import structlog

from standin.aop.proxy.base import (
    ADVISED_ATTR,
    CONTRACT,
    PROXY_ATTR,
    Advised,
    delegating_attribute,
    delegating_method,
    delegating_property,
    intercepting_class_level,
    intercepting_method,
)
from standin.aop.registry import DEFAULT_REGISTRY, MarkerRegistry, public_operations
from standin.kernel.exceptions import UnsupportedTargetError

logger = structlog.get_logger("standin.aop.proxy")

# Object machinery that must stay with the generated class itself.
_RESERVED = frozenset(
    {
        "__init__",
        "__new__",
        "__init_subclass__",
        "__subclasshook__",
        "__class_getitem__",
        "__getattr__",
        "__getattribute__",
        "__setattr__",
        "__delattr__",
        "__dir__",
        "__reduce__",
        "__reduce_ex__",
    }
)


def _most_derived(contracts: tuple[type, ...]) -> tuple[type, ...]:
    """Drop contracts already implied by a more specific one."""
    return tuple(c for c in contracts if not any(o is not c and issubclass(o, c) for o in contracts))


class ContractProxyStrategy:
    """Builds stand-ins that implement every capability contract of the target.

    Each public contract operation, static and class methods included,
    becomes an intercepting method.  Dunder operations, properties and plain
    class attributes declared by the contracts are delegated to the target
    without interception, and any other attribute read falls through to the
    target.  The stand-in passes ``isinstance`` checks for every
    contract but not for the target's concrete type.

    One adapter class is generated per concrete target type and reused.
    """

    name = CONTRACT

    def __init__(self, registry: MarkerRegistry | None = None) -> None:
        self._registry = registry or DEFAULT_REGISTRY
        self._classes: dict[type, type] = {}
        self._lock = threading.Lock()

    def supports(self, target: Any) -> bool:
        return bool(self._registry.contracts_of(type(target)))

    def operations_for(self, target_type: type) -> frozenset[str]:
        """Public operations declared across all contracts of *target_type*."""
        return frozenset(
            name for contract in self._registry.contracts_of(target_type) for name in public_operations(contract)
        )

    def covers(self, target: Any) -> bool:
        """Return ``True`` if every marked public operation of *target* is a contract operation.

        Marked operations outside the contracts would be reachable on the
        stand-in only by falling through to the target, unintercepted.
        """
        target_type = type(target)
        marked = {name for name in self._registry.marked_operations(target_type) if not name.startswith("_")}
        return marked <= self.operations_for(target_type)

    def create(self, advised: Advised) -> Any:
        target_type = advised.target_type
        if not self.supports(advised.target):
            raise UnsupportedTargetError(
                f"{target_type.__qualname__} implements no capability contract",
                target_type=target_type,
            )
        proxy_cls = self.proxy_class_for(target_type)
        return proxy_cls(advised)

    def proxy_class_for(self, target_type: type) -> type:
        with self._lock:
            proxy_cls = self._classes.get(target_type)
            if proxy_cls is None:
                proxy_cls = self._build_class(target_type)
                self._classes[target_type] = proxy_cls
        return proxy_cls

    def _build_class(self, target_type: type) -> type:
        contracts = self._registry.contracts_of(target_type)
        namespace: dict[str, Any] = {}

        for contract in reversed(contracts):
            for attr_name, member in vars(contract).items():
                if attr_name in _RESERVED:
                    continue
                if isinstance(member, property):
                    namespace[attr_name] = delegating_property(attr_name)
                elif isinstance(member, (staticmethod, classmethod)):
                    if attr_name.startswith("_"):
                        namespace[attr_name] = inspect.getattr_static(target_type, attr_name)
                    else:
                        namespace[attr_name] = intercepting_class_level(attr_name, target_type)
                elif not inspect.isfunction(member):
                    if not attr_name.startswith("_"):
                        namespace[attr_name] = delegating_attribute(attr_name, member)
                elif attr_name.startswith("__") and attr_name.endswith("__"):
                    namespace[attr_name] = delegating_method(attr_name, member)
                elif not attr_name.startswith("_"):
                    namespace[attr_name] = intercepting_method(attr_name, member)

        def __init__(self: Any, advised: Advised) -> None:
            object.__setattr__(self, ADVISED_ATTR, advised)

        def __getattr__(self: Any, attr_name: str) -> Any:
            if attr_name == ADVISED_ATTR:
                raise AttributeError(attr_name)
            return getattr(getattr(self, ADVISED_ATTR).target, attr_name)

        def __setattr__(self: Any, attr_name: str, value: Any) -> None:
            setattr(getattr(self, ADVISED_ATTR).target, attr_name, value)

        def __delattr__(self: Any, attr_name: str) -> None:
            delattr(getattr(self, ADVISED_ATTR).target, attr_name)

        def __repr__(self: Any) -> str:
            return f"<contract stand-in for {getattr(self, ADVISED_ATTR).target!r}>"

        namespace.update(
            {
                "__init__": __init__,
                "__getattr__": __getattr__,
                "__setattr__": __setattr__,
                "__delattr__": __delattr__,
                "__module__": target_type.__module__,
                PROXY_ATTR: CONTRACT,
            }
        )
        namespace.setdefault("__repr__", __repr__)

        proxy_cls = types.new_class(
            f"{target_type.__name__}ContractProxy",
            _most_derived(contracts),
            exec_body=lambda ns: ns.update(namespace),
        )
        if inspect.isabstract(proxy_cls):
            missing = ", ".join(sorted(proxy_cls.__abstractmethods__))
            raise UnsupportedTargetError(
                f"Cannot implement contract members of {target_type.__qualname__}: {missing}",
                target_type=target_type,
            )

        logger.debug(
            "proxy.class_generated",
            strategy=CONTRACT,
            target_type=target_type.__qualname__,
            contracts=[c.__qualname__ for c in contracts],
        )
        return proxy_cls
