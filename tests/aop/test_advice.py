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
"""Tests for advice adapters and TransactionInterceptor."""

from __future__ import annotations

import pytest
from structlog.testing import capture_logs

from standin.aop.advice import after, after_returning, after_throwing, before
from standin.aop.chain import AdviceChain
from standin.aop.invocation import MethodInvocation
from standin.aop.markers import transactional
from standin.aop.ordering import get_order, order
from standin.aop.registry import MarkerRegistry
from standin.aop.transaction import TransactionInterceptor


class OrderService:
    def __init__(self) -> None:
        self.trace: list[str] = []

    @transactional
    def place(self, item: str) -> str:
        self.trace.append(f"place({item})")
        return f"order:{item}"

    @transactional
    def cancel(self) -> None:
        self.trace.append("cancel()")
        raise LookupError("no such order")

    def lookup(self) -> str:
        self.trace.append("lookup()")
        return "found"


class TestAdviceAdapters:
    def test_before(self) -> None:
        svc = OrderService()
        chain = AdviceChain([before(lambda inv: svc.trace.append(f"before:{inv.method_name}"))])

        chain.invoke(MethodInvocation(svc, "place", ("book",)))

        assert svc.trace == ["before:place", "place(book)"]

    def test_after_returning_sees_result(self) -> None:
        seen: list[object] = []
        chain = AdviceChain([after_returning(lambda inv: seen.append(inv.return_value))])

        result = chain.invoke(MethodInvocation(OrderService(), "place", ("pen",)))

        assert result == "order:pen"
        assert seen == ["order:pen"]

    def test_after_returning_skipped_on_failure(self) -> None:
        seen: list[object] = []
        chain = AdviceChain([after_returning(lambda inv: seen.append(inv.return_value))])

        with pytest.raises(LookupError):
            chain.invoke(MethodInvocation(OrderService(), "cancel"))
        assert seen == []

    def test_after_throwing_sees_exception_and_reraises(self) -> None:
        seen: list[BaseException | None] = []
        chain = AdviceChain([after_throwing(lambda inv: seen.append(inv.exception))])

        with pytest.raises(LookupError) as exc_info:
            chain.invoke(MethodInvocation(OrderService(), "cancel"))

        assert seen == [exc_info.value]

    def test_after_returning_keeps_real_result_when_inner_advice_rewrites(self) -> None:
        seen: list[object] = []

        def shout(inv: MethodInvocation, proceed) -> str:
            return proceed().upper()

        chain = AdviceChain([after_returning(lambda inv: seen.append(inv.return_value)), shout])

        result = chain.invoke(MethodInvocation(OrderService(), "place", ("pen",)))

        assert result == "ORDER:PEN"
        assert seen == ["order:pen"]

    def test_after_throwing_leaves_exception_unset_for_interceptor_failures(self) -> None:
        seen: list[BaseException | None] = []

        def refuse(inv: MethodInvocation, proceed) -> str:
            raise PermissionError("refused")

        chain = AdviceChain([after_throwing(lambda inv: seen.append(inv.exception)), refuse])
        invocation = MethodInvocation(OrderService(), "place", ("pen",))

        with pytest.raises(PermissionError):
            chain.invoke(invocation)

        assert seen == [None]
        assert invocation.target_exception is None

    def test_after_runs_on_every_exit(self) -> None:
        seen: list[str] = []
        chain = AdviceChain([after(lambda inv: seen.append(inv.method_name))])
        svc = OrderService()

        chain.invoke(MethodInvocation(svc, "place", ("cup",)))
        with pytest.raises(LookupError):
            chain.invoke(MethodInvocation(svc, "cancel"))

        assert seen == ["place", "cancel"]

    def test_adapter_keeps_callback_order(self) -> None:
        @order(5)
        def audit(inv: MethodInvocation) -> None:
            pass

        interceptor = before(audit)
        assert get_order(interceptor) == 5
        assert interceptor.__name__ == "before:audit"


class TestTransactionInterceptor:
    def _interceptor(self, trace: list[str], registry: MarkerRegistry | None = None) -> TransactionInterceptor:
        return TransactionInterceptor(
            begin=lambda inv: trace.append(f"begin:{inv.method_name}"),
            end=lambda inv: trace.append(f"end:{inv.method_name}"),
            registry=registry,
        )

    def test_wraps_marked_operation(self) -> None:
        svc = OrderService()
        chain = AdviceChain([self._interceptor(svc.trace)])

        chain.invoke(MethodInvocation(svc, "place", ("lamp",)))

        assert svc.trace == ["begin:place", "place(lamp)", "end:place"]

    def test_ignores_unmarked_operation(self) -> None:
        svc = OrderService()
        chain = AdviceChain([self._interceptor(svc.trace)])

        chain.invoke(MethodInvocation(svc, "lookup"))

        assert svc.trace == ["lookup()"]

    def test_end_runs_on_failure(self) -> None:
        svc = OrderService()
        chain = AdviceChain([self._interceptor(svc.trace)])

        with pytest.raises(LookupError):
            chain.invoke(MethodInvocation(svc, "cancel"))

        assert svc.trace == ["begin:cancel", "cancel()", "end:cancel"]

    def test_uses_given_registry(self) -> None:
        svc = OrderService()
        registry = MarkerRegistry(declarations={OrderService: ["lookup"]})
        chain = AdviceChain([self._interceptor(svc.trace, registry)])

        chain.invoke(MethodInvocation(svc, "lookup"))

        assert svc.trace == ["begin:lookup", "lookup()", "end:lookup"]

    def test_default_callbacks_log_boundaries(self) -> None:
        chain = AdviceChain([TransactionInterceptor()])

        with capture_logs() as logs:
            chain.invoke(MethodInvocation(OrderService(), "place", ("mug",)))

        events = [entry["event"] for entry in logs]
        assert events == ["transaction.begin", "transaction.end"]
        assert logs[1]["failed"] is False
