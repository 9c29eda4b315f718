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
"""MethodInvocation — one in-flight call through a stand-in."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from standin.kernel.exceptions import InvalidStateError


@dataclass(eq=False)
class MethodInvocation:
    """Represents a single intercepted call, created fresh for every call.

    :meth:`proceed` reaches the real operation on *target* exactly once;
    a second call raises :class:`InvalidStateError` without touching the
    target again.

    Attributes:
        target: The original (unwrapped) object.
        method_name: Name of the invoked operation.
        args: Positional arguments passed by the caller.
        kwargs: Keyword arguments passed by the caller.
        declaring_type: The concrete type the stand-in was built for.
        return_value: The real operation's result (set by :meth:`proceed`).
        exception: The failure raised by the real operation, if any.

    :attr:`target_exception` keeps the real operation's failure even when an
    interceptor reassigns :attr:`exception`.
    """

    target: Any
    method_name: str
    args: tuple = ()
    kwargs: dict[str, Any] = field(default_factory=dict)
    declaring_type: type | None = None
    return_value: Any = None
    exception: Exception | None = None
    _proceeded: bool = field(default=False, init=False, repr=False)
    _target_exception: Exception | None = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.target is None:
            raise ValueError(f"MethodInvocation for '{self.method_name}' requires a target")
        if self.declaring_type is None:
            self.declaring_type = type(self.target)

    @property
    def proceeded(self) -> bool:
        return self._proceeded

    @property
    def target_exception(self) -> Exception | None:
        return self._target_exception

    def proceed(self) -> Any:
        """Invoke the real operation with the captured arguments.

        Failures raised by the operation are recorded on :attr:`exception`
        and re-raised unchanged.
        """
        if self._proceeded:
            raise InvalidStateError(
                f"proceed() was already called for '{self.method_name}'",
                method_name=self.method_name,
            )
        self._proceeded = True

        method = getattr(self.target, self.method_name)
        try:
            result = method(*self.args, **self.kwargs)
        except Exception as exc:
            self.exception = exc
            self._target_exception = exc
            raise
        self.return_value = result
        return result

    def fresh(self) -> MethodInvocation:
        """Return a new, unproceeded invocation for the same call (for resubmission)."""
        return MethodInvocation(
            target=self.target,
            method_name=self.method_name,
            args=self.args,
            kwargs=dict(self.kwargs),
            declaring_type=self.declaring_type,
        )
