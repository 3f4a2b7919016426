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
"""Sort rules and the sequence counter that tags them."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from enum import StrEnum

from pycriteria.kernel.exceptions import CriteriaException


class OrderDirection(StrEnum):
    ASC = "ASC"
    DESC = "DESC"


def coerce_direction(direction: OrderDirection | str) -> OrderDirection:
    """Turn ``"asc"`` / ``"DESC"`` style strings into an :class:`OrderDirection`."""
    try:
        return OrderDirection(str(direction).upper())
    except ValueError:
        raise CriteriaException(
            f"Invalid order direction: {direction!r}",
            code="ORDER_DIRECTION",
            context={"direction": direction},
        ) from None


@dataclass(frozen=True)
class Order:
    """One sort rule declared on a criteria node.

    ``sequence_id`` records when the rule was declared relative to every
    other rule and cursor in the process, so rules declared on different
    nodes of one graph can be merged in declaration order.
    """

    field: str
    direction: OrderDirection
    nulls_first: bool
    sequence_id: int


class SequenceCounter:
    """Thread-safe, monotonically increasing counter starting at 1."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._value = 0

    def next(self) -> int:
        with self._lock:
            self._value += 1
            return self._value

    @property
    def current(self) -> int:
        """The last value handed out (0 before the first call)."""
        return self._value
