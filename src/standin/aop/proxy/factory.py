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
"""ProxyFactory — programmatic stand-in construction with strategy selection."""

from __future__ import annotations

from typing import Any

from standin.aop.chain import AdviceChain, Interceptor
from standin.aop.ordering import get_order
from standin.aop.proxy.base import Advised, ProxyStrategy
from standin.aop.proxy.contract import ContractProxyStrategy
from standin.aop.proxy.subclass import SubclassProxyStrategy
from standin.aop.registry import DEFAULT_REGISTRY, MarkerRegistry
from standin.config.properties import ProxyProperties


class ProxyFactory:
    """Builds a stand-in for one target, always proxying.

    Strategy choice is deterministic: contract-based when the target
    implements at least one capability contract and those contracts declare
    every marked public operation; subclass-based otherwise, or when
    ``proxy_target_class`` forces it.

    Usage::

        proxy = (
            ProxyFactory(DefaultCustomerService())
            .add_interceptor(TransactionInterceptor())
            .get_proxy()
        )
    """

    def __init__(
        self,
        target: Any,
        *,
        interceptors: tuple[Interceptor, ...] | list[Interceptor] = (),
        registry: MarkerRegistry | None = None,
        properties: ProxyProperties | None = None,
        contract_strategy: ContractProxyStrategy | None = None,
        subclass_strategy: SubclassProxyStrategy | None = None,
    ) -> None:
        if target is None:
            raise ValueError("ProxyFactory requires a target")
        self._target = target
        self._interceptors: list[Interceptor] = list(interceptors)
        self._registry = registry or DEFAULT_REGISTRY
        self._properties = properties or ProxyProperties()
        self._proxy_target_class = self._properties.proxy_target_class
        self._contract = contract_strategy or ContractProxyStrategy(self._registry)
        self._subclass = subclass_strategy or SubclassProxyStrategy(
            self._registry, sealed_operations=self._properties.sealed_operations
        )

    @property
    def target(self) -> Any:
        return self._target

    @property
    def proxy_target_class(self) -> bool:
        return self._proxy_target_class

    def set_proxy_target_class(self, value: bool) -> ProxyFactory:
        self._proxy_target_class = value
        return self

    def add_interceptor(self, interceptor: Interceptor) -> ProxyFactory:
        self._interceptors.append(interceptor)
        return self

    def build_chain(self) -> AdviceChain:
        """Freeze the registered interceptors into a chain, stably sorted by order."""
        return AdviceChain(sorted(self._interceptors, key=get_order))

    def select_strategy(self) -> ProxyStrategy:
        if (
            not self._proxy_target_class
            and self._contract.supports(self._target)
            and self._contract.covers(self._target)
        ):
            return self._contract
        return self._subclass

    def get_proxy(self) -> Any:
        advised = Advised(
            target=self._target,
            chain=self.build_chain(),
            wrap_target_errors=self._properties.wrap_target_errors,
        )
        return self.select_strategy().create(advised)
