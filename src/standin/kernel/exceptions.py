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
"""Unified exception hierarchy for Standin.

All library exceptions inherit from StandinException, so callers can catch
one base type for every proxying failure.

Categories:
- Construction: UnsupportedTargetError, MarkerDeclarationError
- Protocol: InvalidStateError
- Invocation: TargetInvocationError
"""

from __future__ import annotations


# =============================================================================
# Base Exception
# =============================================================================


class StandinException(Exception):
    """Base exception for all Standin errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "PROXY_UNSUPPORTED_TARGET").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Construction-time Exceptions
# =============================================================================


class UnsupportedTargetError(StandinException):
    """A proxy strategy was asked to wrap a target it cannot handle."""

    def __init__(self, message: str, target_type: type | None = None) -> None:
        super().__init__(
            message,
            code="PROXY_UNSUPPORTED_TARGET",
            context={"target_type": getattr(target_type, "__qualname__", None)},
        )
        self.target_type = target_type


class MarkerDeclarationError(StandinException):
    """An interception marker was applied to something that is not an operation."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="MARKER_MALFORMED")


# =============================================================================
# Protocol Exceptions
# =============================================================================


class InvalidStateError(StandinException):
    """An invocation or chain link was driven outside its exactly-once protocol."""

    def __init__(self, message: str, method_name: str | None = None) -> None:
        super().__init__(message, code="INVOCATION_INVALID_STATE", context={"method": method_name})
        self.method_name = method_name


# =============================================================================
# Invocation Exceptions
# =============================================================================


class TargetInvocationError(StandinException):
    """The real operation failed after being reached through ``proceed()``.

    Only raised when the proxy is configured to wrap target failures; the
    original exception is kept as ``original`` and as ``__cause__``.
    """

    def __init__(self, method_name: str, original: BaseException) -> None:
        super().__init__(
            f"Invocation of '{method_name}' failed: {original!r}",
            code="TARGET_INVOCATION_FAILED",
            context={"method": method_name, "error_type": type(original).__name__},
        )
        self.method_name = method_name
        self.original = original
