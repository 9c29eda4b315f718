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
"""StructlogAdapter — configures structlog output for the ``standin`` logger namespace."""

from __future__ import annotations

import logging
import sys
from typing import Any, TextIO

import structlog

from standin.core.config import Config

NAMESPACE = "standin"

# Short area names accepted under standin.logging.level.*
AREAS: dict[str, str] = {
    "proxy": "standin.aop.proxy",
    "post-processor": "standin.aop.post_processor",
    "transaction": "standin.aop.transaction",
}


class StructlogAdapter:
    """Logging adapter backed by structlog and scoped to the library.

    Reads ``standin.logging.level.root`` (the level of the whole ``standin``
    namespace), per-area levels under ``standin.logging.level.<area>`` and
    ``standin.logging.format`` (``console`` or ``json``).  Areas are either a
    short name from :data:`AREAS` or a full logger name.

    Only the ``standin`` stdlib logger receives a handler; the host
    application's root logger is left alone.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream
        self._root_level: str = "INFO"
        self._format: str = "console"
        self._area_levels: dict[str, str] = {}
        self._handler: logging.Handler | None = None

    @staticmethod
    def logger_name(area: str) -> str:
        """Resolve a short area name to its logger name."""
        return AREAS.get(area, area)

    def configure(self, config: Config) -> None:
        level_section = dict(config.get_section("standin.logging.level"))
        self._root_level = str(level_section.pop("root", "INFO")).upper()
        self._area_levels = {self.logger_name(k): str(v).upper() for k, v in level_section.items()}
        self._format = str(config.get("standin.logging.format", "console")).lower()

        self._setup_structlog()
        self._install_handler()
        for name, level in self._area_levels.items():
            self.set_level(name, level)

    def get_logger(self, name: str) -> Any:
        return structlog.get_logger(self.logger_name(name))

    def set_level(self, name: str, level: str) -> None:
        """Set the level of one area or logger; unknown level names mean INFO."""
        log_level = getattr(logging, level.upper(), logging.INFO)
        logging.getLogger(self.logger_name(name)).setLevel(log_level)

    def _setup_structlog(self) -> None:
        renderer: structlog.types.Processor
        if self._format == "json":
            renderer = structlog.processors.JSONRenderer()
        else:
            renderer = structlog.dev.ConsoleRenderer(colors=False)

        structlog.configure(
            processors=[
                structlog.stdlib.filter_by_level,
                structlog.stdlib.add_logger_name,
                structlog.stdlib.add_log_level,
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.processors.format_exc_info,
                renderer,
            ],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=False,
        )

    def _install_handler(self) -> None:
        namespace = logging.getLogger(NAMESPACE)
        if self._handler is not None:
            namespace.removeHandler(self._handler)

        self._handler = logging.StreamHandler(self._stream or sys.stderr)
        self._handler.setFormatter(logging.Formatter("%(message)s"))
        namespace.addHandler(self._handler)
        namespace.setLevel(getattr(logging, self._root_level, logging.INFO))
        namespace.propagate = False
