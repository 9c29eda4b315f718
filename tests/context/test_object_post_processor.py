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
"""Tests for the ObjectPostProcessor lifecycle protocol."""

from typing import Any

from standin.aop.post_processor import ProxyBeanPostProcessor
from standin.context.post_processor import ObjectPostProcessor


class TestObjectPostProcessor:
    def test_protocol_is_structural(self):
        class Tagger:
            def before_init(self, bean: Any, bean_name: str) -> Any:
                return bean

            def after_init(self, bean: Any, bean_name: str) -> Any:
                bean.tagged = True
                return bean

        assert isinstance(Tagger(), ObjectPostProcessor)

    def test_non_conforming_rejected(self):
        class OnlyBefore:
            def before_init(self, bean: Any, bean_name: str) -> Any:
                return bean

        assert not isinstance(OnlyBefore(), ObjectPostProcessor)

    def test_proxy_post_processor_conforms(self):
        assert isinstance(ProxyBeanPostProcessor(), ObjectPostProcessor)
