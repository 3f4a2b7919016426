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
"""Tests for Order, SequenceCounter and CriteriaContext."""

from __future__ import annotations

import threading

import pytest

from pycriteria.criteria.context import CriteriaContext
from pycriteria.criteria.order import Order, OrderDirection, SequenceCounter, coerce_direction
from pycriteria.kernel.exceptions import CriteriaException


class TestOrderDirection:
    def test_coerces_lowercase(self) -> None:
        assert coerce_direction("desc") is OrderDirection.DESC
        assert coerce_direction(OrderDirection.ASC) is OrderDirection.ASC

    def test_rejects_unknown(self) -> None:
        with pytest.raises(CriteriaException):
            coerce_direction("sideways")


class TestOrder:
    def test_is_frozen(self) -> None:
        order = Order("created_at", OrderDirection.ASC, False, 1)
        with pytest.raises(AttributeError):
            order.field = "uuid"  # type: ignore[misc]


class TestSequenceCounter:
    def test_starts_at_one_and_increases(self) -> None:
        counter = SequenceCounter()
        assert counter.current == 0
        assert [counter.next() for _ in range(3)] == [1, 2, 3]
        assert counter.current == 3

    def test_no_collisions_across_threads(self) -> None:
        counter = SequenceCounter()
        seen: list[int] = []
        lock = threading.Lock()

        def worker() -> None:
            values = [counter.next() for _ in range(500)]
            with lock:
                seen.extend(values)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(seen) == 4000
        assert len(set(seen)) == 4000
        assert max(seen) == 4000


class TestCriteriaContext:
    def test_default_is_shared(self) -> None:
        assert CriteriaContext.default() is CriteriaContext.default()

    def test_separate_contexts_have_separate_counters(self) -> None:
        first, second = CriteriaContext(), CriteriaContext()
        assert first.next_sequence_id() == 1
        assert first.next_sequence_id() == 2
        assert second.next_sequence_id() == 1

    def test_accepts_explicit_counter(self) -> None:
        counter = SequenceCounter()
        counter.next()
        assert CriteriaContext(counter).next_sequence_id() == 2
