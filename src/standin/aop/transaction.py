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
"""TransactionInterceptor — begin/end boundaries around marked operations."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import structlog

from standin.aop.invocation import MethodInvocation
from standin.aop.registry import DEFAULT_REGISTRY, MarkerRegistry

logger = structlog.get_logger("standin.aop.transaction")


def _log_begin(invocation: MethodInvocation) -> None:
    logger.info("transaction.begin", method=invocation.method_name)


def _log_end(invocation: MethodInvocation) -> None:
    logger.info(
        "transaction.end",
        method=invocation.method_name,
        failed=invocation.exception is not None,
    )


class TransactionInterceptor:
    """Wraps each marked operation in a begin/end boundary.

    Unmarked operations pass straight through.  ``end`` runs in a
    ``finally`` block, so it fires even when the real operation raises.

    Args:
        begin: Called with the invocation before proceeding.
        end: Called with the invocation after the call, on every exit path.
        registry: Marker lookup; defaults to the shared registry.
    """

    def __init__(
        self,
        begin: Callable[[MethodInvocation], Any] | None = None,
        end: Callable[[MethodInvocation], Any] | None = None,
        registry: MarkerRegistry | None = None,
    ) -> None:
        self._begin = begin or _log_begin
        self._end = end or _log_end
        self._registry = registry or DEFAULT_REGISTRY

    def invoke(self, invocation: MethodInvocation, proceed: Callable[[], Any]) -> Any:
        cls = invocation.declaring_type or type(invocation.target)
        if not self._registry.is_marked(cls, invocation.method_name):
            return proceed()

        self._begin(invocation)
        try:
            return proceed()
        finally:
            self._end(invocation)
