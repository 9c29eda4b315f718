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
"""MarkerRegistry — per-type table of operations that require interception."""

from __future__ import annotations

import abc
import inspect
import threading
from collections.abc import Iterable, Mapping
from typing import Any, Generic, Protocol

from standin.aop.markers import is_marked_member

_NON_CONTRACTS: frozenset[type] = frozenset({object, Protocol, Generic, abc.ABC})  # type: ignore[arg-type]


def is_contract(cls: type) -> bool:
    """Return ``True`` if *cls* is a capability contract.

    Contracts are ``typing.Protocol`` classes and abstract base classes that
    declare at least one abstract member.
    """
    if cls in _NON_CONTRACTS:
        return False
    if vars(cls).get("_is_protocol", False):
        return True
    return isinstance(cls, abc.ABCMeta) and bool(getattr(cls, "__abstractmethods__", ()))


def public_operations(cls: type) -> Iterable[str]:
    """Yield public function names declared in *cls* itself."""
    for name, member in vars(cls).items():
        if name.startswith("_"):
            continue
        if inspect.isfunction(member) or isinstance(member, (staticmethod, classmethod)):
            yield name


class MarkerRegistry:
    """Answers "is this operation marked?" for a type and everything it implements.

    An operation is marked on a type when the type, any base class or any
    capability contract in its MRO declares that name with the
    :func:`~standin.aop.markers.transactional` marker, or when an explicit
    *declarations* entry names it.  Implementations therefore inherit the
    marker from the contract operation they implement.

    The table for a type is computed once on first lookup and never changes
    afterwards.

    Usage::

        registry = MarkerRegistry()
        registry.is_marked(DefaultCustomerService, "create")  # True

        # Third-party types that cannot be decorated
        registry = MarkerRegistry(declarations={ThirdPartyService: {"save"}})
    """

    def __init__(self, declarations: Mapping[type, Iterable[str]] | None = None) -> None:
        self._declarations: dict[type, frozenset[str]] = {
            owner: frozenset(names) for owner, names in (declarations or {}).items()
        }
        self._table: dict[type, frozenset[str]] = {}
        self._lock = threading.Lock()

    def contracts_of(self, cls: type) -> tuple[type, ...]:
        """Capability contracts implemented by *cls*, closest first."""
        return tuple(base for base in cls.__mro__[1:] if is_contract(base))

    def marked_operations(self, cls: type) -> frozenset[str]:
        """All operation names marked on *cls* or inherited from its bases and contracts."""
        cached = self._table.get(cls)
        if cached is not None:
            return cached
        with self._lock:
            cached = self._table.get(cls)
            if cached is None:
                cached = self._scan(cls)
                self._table[cls] = cached
        return cached

    def is_marked(self, cls: type, operation_name: str) -> bool:
        return operation_name in self.marked_operations(cls)

    def has_any_marked_operation(self, target: Any) -> bool:
        """Return ``True`` if any operation of *target*'s type requires interception."""
        cls = target if inspect.isclass(target) else type(target)
        return bool(self.marked_operations(cls))

    def _scan(self, cls: type) -> frozenset[str]:
        marked: set[str] = set()
        for klass in cls.__mro__:
            if klass is object:
                continue
            marked.update(self._declarations.get(klass, ()))
            for name, member in vars(klass).items():
                if is_marked_member(member):
                    marked.add(name)
        return frozenset(marked)


DEFAULT_REGISTRY = MarkerRegistry()
