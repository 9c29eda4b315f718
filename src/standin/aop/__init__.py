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
"""Method interception for Standin — markers, advice chains and stand-ins."""

from standin.aop.advice import after, after_returning, after_throwing, before
from standin.aop.chain import AdviceChain, Interceptor, MethodInterceptor
from standin.aop.invocation import MethodInvocation
from standin.aop.markers import intercepted, transactional
from standin.aop.ordering import HIGHEST_PRECEDENCE, LOWEST_PRECEDENCE, get_order, order
from standin.aop.post_processor import ProxyBeanPostProcessor
from standin.aop.proxy import (
    ContractProxyStrategy,
    ProxyFactory,
    SubclassProxyStrategy,
    get_target,
    is_stand_in,
    proxy_strategy,
)
from standin.aop.registry import DEFAULT_REGISTRY, MarkerRegistry
from standin.aop.transaction import TransactionInterceptor

__all__ = [
    "DEFAULT_REGISTRY",
    "HIGHEST_PRECEDENCE",
    "LOWEST_PRECEDENCE",
    "AdviceChain",
    "ContractProxyStrategy",
    "Interceptor",
    "MarkerRegistry",
    "MethodInterceptor",
    "MethodInvocation",
    "ProxyBeanPostProcessor",
    "ProxyFactory",
    "SubclassProxyStrategy",
    "TransactionInterceptor",
    "after",
    "after_returning",
    "after_throwing",
    "before",
    "get_order",
    "get_target",
    "intercepted",
    "is_stand_in",
    "order",
    "proxy_strategy",
    "transactional",
]
