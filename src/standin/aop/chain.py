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
"""AdviceChain — ordered, immutable chain of method interceptors."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any, Protocol, Union, runtime_checkable

from standin.aop.invocation import MethodInvocation
from standin.kernel.exceptions import InvalidStateError


@runtime_checkable
class MethodInterceptor(Protocol):
    """Around-advice contract.

    ``proceed`` continues with the rest of the chain and must be called at
    most once; not calling it short-circuits the real operation.
    """

    def invoke(self, invocation: MethodInvocation, proceed: Callable[[], Any]) -> Any: ...


Interceptor = Union[MethodInterceptor, Callable[[MethodInvocation, Callable[[], Any]], Any]]


def _proceed_to_target(invocation: MethodInvocation) -> Any:
    return invocation.proceed()


class _NextLink:
    """One-shot ``proceed`` capability handed to a single interceptor."""

    __slots__ = ("_chain", "_index", "_invocation", "_called")

    def __init__(self, chain: AdviceChain, index: int, invocation: MethodInvocation) -> None:
        self._chain = chain
        self._index = index
        self._invocation = invocation
        self._called = False

    def __call__(self) -> Any:
        if self._called:
            raise InvalidStateError(
                f"Interceptor at position {self._index - 1} called proceed() more than once "
                f"for '{self._invocation.method_name}'",
                method_name=self._invocation.method_name,
            )
        self._called = True
        return self._chain._invoke_at(self._index, self._invocation)


class AdviceChain:
    """Runs interceptors front-to-back, then the terminal action.

    The chain performs no filtering: every interceptor sees every call and
    decides for itself whether the operation concerns it.  Nested calls give
    reverse-order unwinding, so "after" logic written with ``try/finally``
    runs on every exit path.

    Usage::

        chain = AdviceChain([audit, tx])
        chain.invoke(MethodInvocation(target, "create"))
    """

    def __init__(
        self,
        interceptors: Iterable[Interceptor] = (),
        terminal: Callable[[MethodInvocation], Any] | None = None,
    ) -> None:
        self._interceptors: tuple[Interceptor, ...] = tuple(interceptors)
        self._terminal = terminal or _proceed_to_target

    @property
    def interceptors(self) -> tuple[Interceptor, ...]:
        return self._interceptors

    def __len__(self) -> int:
        return len(self._interceptors)

    def invoke(self, invocation: MethodInvocation) -> Any:
        return self._invoke_at(0, invocation)

    def _invoke_at(self, index: int, invocation: MethodInvocation) -> Any:
        if index == len(self._interceptors):
            return self._terminal(invocation)

        interceptor = self._interceptors[index]
        link = _NextLink(self, index + 1, invocation)
        if isinstance(interceptor, MethodInterceptor):
            return interceptor.invoke(invocation, link)
        return interceptor(invocation, link)
