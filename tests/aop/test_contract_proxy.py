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
"""Tests for ContractProxyStrategy — stand-ins implementing capability contracts."""

from __future__ import annotations

import abc
import inspect
from collections.abc import Sized
from typing import Protocol, runtime_checkable

import pytest

from standin.aop.chain import AdviceChain
from standin.aop.markers import transactional
from standin.aop.proxy.base import CONTRACT, Advised, get_target, is_stand_in, proxy_strategy
from standin.aop.proxy.contract import ContractProxyStrategy
from standin.kernel.exceptions import UnsupportedTargetError

# ---------------------------------------------------------------------------
# Helper contracts and targets
# ---------------------------------------------------------------------------


@runtime_checkable
class CustomerService(Protocol):
    @transactional
    def create(self, name: str) -> str: ...

    def add(self) -> str: ...


class DefaultCustomerService(CustomerService):
    def __init__(self) -> None:
        self.created: list[str] = []

    def create(self, name: str) -> str:
        self.created.append(name)
        return f"created:{name}"

    def add(self) -> str:
        return "added"

    def extra(self) -> str:
        return "extra"


class Repository(abc.ABC):
    @abc.abstractmethod
    @transactional
    def save(self, item: str) -> int: ...

    @property
    @abc.abstractmethod
    def name(self) -> str: ...


class MemoryRepository(Repository):
    def __init__(self) -> None:
        self.items: list[str] = []
        self._name = "memory"

    def save(self, item: str) -> int:
        self.items.append(item)
        return len(self.items)

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, value: str) -> None:
        self._name = value


class Inventory(Sized):
    def __init__(self) -> None:
        self.stock = ["a", "b"]

    def __len__(self) -> int:
        return len(self.stock)

    @transactional
    def restock(self, item: str) -> None:
        self.stock.append(item)


class WidgetFactory(Protocol):
    LIMIT = 10

    @transactional
    @classmethod
    def build(cls, size: int) -> str: ...

    @staticmethod
    def describe() -> str: ...


class SmallWidgetFactory(WidgetFactory):
    LIMIT = 3

    @classmethod
    def build(cls, size: int) -> str:
        return f"widget:{min(size, cls.LIMIT)}"

    @staticmethod
    def describe() -> str:
        return "small widgets"


class Standalone:
    @transactional
    def run(self) -> None:
        pass


def recording_chain(trace: list[str]) -> AdviceChain:
    def record(invocation, proceed):
        trace.append(invocation.method_name)
        return proceed()

    return AdviceChain([record])


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------


class TestApplicability:
    def test_supports_contract_targets(self) -> None:
        assert ContractProxyStrategy().supports(DefaultCustomerService())

    def test_rejects_target_without_contracts(self) -> None:
        strategy = ContractProxyStrategy()
        assert not strategy.supports(Standalone())

        with pytest.raises(UnsupportedTargetError) as exc_info:
            strategy.create(Advised(Standalone(), AdviceChain()))

        assert exc_info.value.target_type is Standalone
        assert exc_info.value.code == "PROXY_UNSUPPORTED_TARGET"


class TestProtocolContract:
    def test_stand_in_satisfies_contract(self) -> None:
        target = DefaultCustomerService()
        proxy = ContractProxyStrategy().create(Advised(target, AdviceChain()))

        assert isinstance(proxy, CustomerService)
        assert not isinstance(proxy, DefaultCustomerService)
        assert is_stand_in(proxy)
        assert proxy_strategy(proxy) == CONTRACT
        assert get_target(proxy) is target

    def test_contract_operations_route_through_chain(self) -> None:
        trace: list[str] = []
        target = DefaultCustomerService()
        proxy = ContractProxyStrategy().create(Advised(target, recording_chain(trace)))

        assert proxy.create("ada") == "created:ada"
        assert proxy.add() == "added"
        assert trace == ["create", "add"]
        assert target.created == ["ada"]

    def test_non_contract_attributes_fall_through_to_target(self) -> None:
        trace: list[str] = []
        target = DefaultCustomerService()
        proxy = ContractProxyStrategy().create(Advised(target, recording_chain(trace)))

        assert proxy.extra() == "extra"
        assert proxy.created is target.created
        assert trace == []

    def test_signatures_match_target(self) -> None:
        target = DefaultCustomerService()
        proxy = ContractProxyStrategy().create(Advised(target, AdviceChain()))

        assert inspect.signature(proxy.create) == inspect.signature(target.create)
        assert proxy.create.__name__ == "create"

    def test_missing_attribute_raises_attribute_error(self) -> None:
        proxy = ContractProxyStrategy().create(Advised(DefaultCustomerService(), AdviceChain()))
        with pytest.raises(AttributeError):
            proxy.does_not_exist


class TestAbcContract:
    def test_abstract_methods_implemented(self) -> None:
        trace: list[str] = []
        target = MemoryRepository()
        proxy = ContractProxyStrategy().create(Advised(target, recording_chain(trace)))

        assert isinstance(proxy, Repository)
        assert proxy.save("x") == 1
        assert target.items == ["x"]
        assert trace == ["save"]

    def test_properties_delegate_to_target(self) -> None:
        target = MemoryRepository()
        proxy = ContractProxyStrategy().create(Advised(target, AdviceChain()))

        assert proxy.name == "memory"
        proxy.name = "renamed"
        assert target.name == "renamed"

    def test_dunder_operations_delegate_without_interception(self) -> None:
        trace: list[str] = []
        target = Inventory()
        proxy = ContractProxyStrategy().create(Advised(target, recording_chain(trace)))

        assert isinstance(proxy, Sized)
        assert len(proxy) == 2
        proxy.restock("c")
        assert len(proxy) == 3
        assert trace == []

    def test_marked_operation_outside_contract_is_not_covered(self) -> None:
        strategy = ContractProxyStrategy()
        assert strategy.operations_for(Inventory) == frozenset()
        assert not strategy.covers(Inventory())
        assert strategy.covers(MemoryRepository())


class TestClassCache:
    def test_one_class_per_target_type(self) -> None:
        strategy = ContractProxyStrategy()
        first = strategy.create(Advised(DefaultCustomerService(), AdviceChain()))
        second = strategy.create(Advised(DefaultCustomerService(), AdviceChain()))

        assert type(first) is type(second)
        assert get_target(first) is not get_target(second)


class TestClassLevelMembers:
    def test_class_and_static_methods_route_through_chain(self) -> None:
        trace: list[str] = []
        proxy = ContractProxyStrategy().create(Advised(SmallWidgetFactory(), recording_chain(trace)))

        assert proxy.build(5) == "widget:3"
        assert proxy.describe() == "small widgets"
        assert trace == ["build", "describe"]

    def test_class_access_reaches_target_type(self) -> None:
        trace: list[str] = []
        proxy = ContractProxyStrategy().create(Advised(SmallWidgetFactory(), recording_chain(trace)))

        assert type(proxy).build(2) == "widget:2"
        assert trace == []

    def test_class_method_signature_matches_target(self) -> None:
        target = SmallWidgetFactory()
        proxy = ContractProxyStrategy().create(Advised(target, AdviceChain()))

        assert inspect.signature(proxy.build) == inspect.signature(target.build)

    def test_contract_constants_read_from_target(self) -> None:
        proxy = ContractProxyStrategy().create(Advised(SmallWidgetFactory(), AdviceChain()))

        assert proxy.LIMIT == 3
