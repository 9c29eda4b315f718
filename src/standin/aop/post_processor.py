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
"""ProxyBeanPostProcessor — replaces marked objects with intercepting stand-ins."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

import structlog

from standin.aop.chain import Interceptor
from standin.aop.proxy.base import is_stand_in
from standin.aop.proxy.contract import ContractProxyStrategy
from standin.aop.proxy.factory import ProxyFactory
from standin.aop.proxy.subclass import SubclassProxyStrategy
from standin.aop.registry import DEFAULT_REGISTRY, MarkerRegistry
from standin.config.properties import ProxyProperties
from standin.core.config import Config
from standin.logging.port import LoggingPort
from standin.logging.structlog_adapter import StructlogAdapter

logger = structlog.get_logger("standin.aop.post_processor")


class ProxyBeanPostProcessor:
    """Object post-processor that decides whether, and how, to proxy.

    For each object handed to :meth:`post_process`:

    1. Stand-ins are returned unchanged, so processing is idempotent.
    2. Objects without any marked operation are returned unchanged.
    3. Otherwise a stand-in is built by :class:`ProxyFactory` with a snapshot
       of the interceptors registered so far, in registration order (after a
       stable sort by :func:`~standin.aop.ordering.order`).

    Generated proxy classes are cached per concrete type and shared by every
    stand-in this post-processor creates.
    """

    def __init__(
        self,
        interceptors: Iterable[Interceptor] = (),
        *,
        registry: MarkerRegistry | None = None,
        properties: ProxyProperties | None = None,
    ) -> None:
        self._interceptors: list[Interceptor] = list(interceptors)
        self._registry = registry or DEFAULT_REGISTRY
        self._properties = properties or ProxyProperties()
        self._contract = ContractProxyStrategy(self._registry)
        self._subclass = SubclassProxyStrategy(
            self._registry, sealed_operations=self._properties.sealed_operations
        )

    @classmethod
    def from_config(
        cls,
        config: Config,
        interceptors: Iterable[Interceptor] = (),
        *,
        registry: MarkerRegistry | None = None,
        logging_port: LoggingPort | None = None,
    ) -> ProxyBeanPostProcessor:
        """Create a post-processor bound to ``standin.proxy.*`` settings.

        When *config* has a ``standin.logging`` section, or a *logging_port*
        is given, logging is configured from the same config first
        (:class:`StructlogAdapter` by default).
        """
        if logging_port is not None or config.get("standin.logging") is not None:
            (logging_port or StructlogAdapter()).configure(config)
        return cls(interceptors, registry=registry, properties=config.bind(ProxyProperties))

    @property
    def registry(self) -> MarkerRegistry:
        return self._registry

    @property
    def properties(self) -> ProxyProperties:
        return self._properties

    @property
    def interceptors(self) -> tuple[Interceptor, ...]:
        return tuple(self._interceptors)

    def add_interceptor(self, interceptor: Interceptor) -> None:
        """Register an interceptor for stand-ins created from now on."""
        self._interceptors.append(interceptor)

    def post_process(self, bean: Any) -> Any:
        """Return a stand-in for *bean*, or *bean* itself when no interception is needed."""
        if is_stand_in(bean):
            return bean

        bean_type = type(bean)
        if not self._registry.has_any_marked_operation(bean):
            logger.debug("proxy.skipped", target_type=bean_type.__qualname__, reason="no_marked_operations")
            return bean

        factory = ProxyFactory(
            bean,
            interceptors=self._interceptors,
            registry=self._registry,
            properties=self._properties,
            contract_strategy=self._contract,
            subclass_strategy=self._subclass,
        )
        strategy = factory.select_strategy()
        proxy = factory.get_proxy()
        logger.info(
            "proxy.created",
            target_type=bean_type.__qualname__,
            strategy=strategy.name,
            marked=sorted(self._registry.marked_operations(bean_type)),
            interceptors=len(self._interceptors),
        )
        return proxy

    # ------------------------------------------------------------------
    # Object lifecycle hooks
    # ------------------------------------------------------------------

    def before_init(self, bean: Any, bean_name: str) -> Any:
        return bean

    def after_init(self, bean: Any, bean_name: str) -> Any:
        return self.post_process(bean)
