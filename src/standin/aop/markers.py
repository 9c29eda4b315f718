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
"""Interception markers — @transactional and its alias @intercepted."""

from __future__ import annotations

import inspect
from typing import Any, TypeVar

from standin.kernel.exceptions import MarkerDeclarationError

T = TypeVar("T")

MARKER_ATTR = "__standin_marked__"


def _unwrap(member: Any) -> Any:
    """Return the plain function behind a staticmethod / classmethod."""
    if isinstance(member, (staticmethod, classmethod)):
        return member.__func__
    return member


def transactional(target: T) -> T:
    """Mark an operation, or every operation of a class, as requiring interception.

    On a function, sets ``__standin_marked__ = True``.  On a class, marks
    each public function declared in the class body; inherited functions
    are not affected.

    Raises:
        MarkerDeclarationError: If *target* is neither a function nor a class.
    """
    if inspect.isclass(target):
        for name, member in vars(target).items():
            if name.startswith("_"):
                continue
            func = _unwrap(member)
            if inspect.isfunction(func):
                setattr(func, MARKER_ATTR, True)
        setattr(target, MARKER_ATTR, True)
        return target

    func = _unwrap(target)
    if not inspect.isfunction(func):
        raise MarkerDeclarationError(
            f"@transactional can only decorate functions or classes, got {type(target).__name__}"
        )
    setattr(func, MARKER_ATTR, True)
    return target


intercepted = transactional


def is_marked_member(member: Any) -> bool:
    """Return ``True`` if a raw class member carries the interception marker."""
    return bool(getattr(_unwrap(member), MARKER_ATTR, False))


def is_sealed(member: Any) -> bool:
    """Return ``True`` if *member* was declared with :func:`typing.final`."""
    return bool(getattr(member, "__final__", False) or getattr(_unwrap(member), "__final__", False))
