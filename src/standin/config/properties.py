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
"""Proxy subsystem configuration properties."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from standin.core.config import config_properties

SealedOperationPolicy = Literal["pass-through", "warn", "fail"]


@config_properties(prefix="standin.proxy")
class ProxyProperties(BaseModel):
    """Configuration for stand-in creation (standin.proxy.*)."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    proxy_target_class: bool = Field(default=False, alias="proxy-target-class")
    sealed_operations: SealedOperationPolicy = Field(default="pass-through", alias="sealed-operations")
    wrap_target_errors: bool = Field(default=False, alias="wrap-target-errors")
