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
"""StructlogAdapter: renders pycriteria's structlog events inside its own logger namespace.

Library modules log through ``structlog.get_logger("pycriteria.<area>")``.
The adapter routes those events to the stdlib ``pycriteria`` logger, gives
that logger a single handler with a structlog formatter and applies the
configured levels. Loggers outside the namespace, the root logger
included, are left untouched.
"""

from __future__ import annotations

import logging
import sys
from typing import IO, Any

import structlog

from pycriteria.config.properties.logging import LoggingProperties
from pycriteria.core.config import Config

NAMESPACE = "pycriteria"


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger by name."""
    return structlog.get_logger(name)


def qualify(name: str) -> str:
    """Place *name* inside the ``pycriteria`` namespace.

    ``"root"`` and ``"pycriteria"`` map to the namespace logger itself;
    ``"criteria.registry"`` becomes ``"pycriteria.criteria.registry"``.
    """
    if name in ("root", NAMESPACE):
        return NAMESPACE
    if name.startswith(NAMESPACE + "."):
        return name
    return f"{NAMESPACE}.{name}"


class StructlogAdapter:
    """Configures structlog output for the ``pycriteria`` logger namespace.

    Args:
        stream: Where rendered events are written. Defaults to ``sys.stderr``.
    """

    def __init__(self, stream: IO[str] | None = None) -> None:
        self._stream = stream
        self._handler: logging.Handler | None = None
        self._format = "console"
        self._levels: dict[str, str] = {NAMESPACE: "INFO"}

    @property
    def format(self) -> str:
        return self._format

    @property
    def levels(self) -> dict[str, str]:
        """Configured levels keyed by fully qualified logger name."""
        return dict(self._levels)

    @property
    def handler(self) -> logging.Handler | None:
        return self._handler

    def configure(self, config: Config) -> None:
        """Apply the ``pycriteria.logging`` section of *config*.

        Calling it again replaces the previous handler instead of adding one.
        """
        properties = config.bind(LoggingProperties)
        self._format = str(config.get("pycriteria.logging.format", properties.format)).lower()
        self._levels = {NAMESPACE: "INFO"}
        for name, level in properties.level.items():
            self._levels[qualify(name)] = str(level).upper()

        structlog.configure(
            processors=[
                structlog.contextvars.merge_contextvars,
                structlog.stdlib.add_logger_name,
                structlog.stdlib.add_log_level,
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.processors.StackInfoRenderer(),
                structlog.processors.format_exc_info,
                structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
            ],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=False,
        )
        self._install_handler()
        for name, level in self._levels.items():
            self.set_level(name, level)

    def get_logger(self, name: str) -> Any:
        """Get a structlog logger inside the namespace."""
        return get_logger(qualify(name))

    def set_level(self, name: str, level: str) -> None:
        """Set the level of a logger inside the namespace; unknown levels mean INFO."""
        log_level = logging.getLevelName(level.upper())
        if not isinstance(log_level, int):
            log_level = logging.INFO
        logging.getLogger(qualify(name)).setLevel(log_level)

    def _renderer(self) -> Any:
        if self._format == "json":
            return structlog.processors.JSONRenderer()
        return structlog.dev.ConsoleRenderer(colors=False)

    def _install_handler(self) -> None:
        namespace_logger = logging.getLogger(NAMESPACE)
        if self._handler is not None:
            namespace_logger.removeHandler(self._handler)

        handler = logging.StreamHandler(self._stream if self._stream is not None else sys.stderr)
        handler.setFormatter(
            structlog.stdlib.ProcessorFormatter(
                processors=[
                    structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                    self._renderer(),
                ],
                foreign_pre_chain=[
                    structlog.stdlib.add_logger_name,
                    structlog.stdlib.add_log_level,
                    structlog.processors.TimeStamper(fmt="iso"),
                ],
            )
        )
        namespace_logger.addHandler(handler)
        namespace_logger.propagate = False
        self._handler = handler
