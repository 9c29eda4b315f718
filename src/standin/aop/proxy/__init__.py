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
"""Proxy strategies and the factory that selects between them."""

from standin.aop.proxy.base import (
    CONTRACT,
    SUBCLASS,
    Advised,
    ProxyStrategy,
    get_target,
    is_stand_in,
    proxy_strategy,
)
from standin.aop.proxy.contract import ContractProxyStrategy
from standin.aop.proxy.factory import ProxyFactory
from standin.aop.proxy.subclass import SubclassProxyStrategy

__all__ = [
    "CONTRACT",
    "SUBCLASS",
    "Advised",
    "ContractProxyStrategy",
    "ProxyFactory",
    "ProxyStrategy",
    "SubclassProxyStrategy",
    "get_target",
    "is_stand_in",
    "proxy_strategy",
]
