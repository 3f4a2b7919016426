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
"""CriteriaContext: explicit owner of the process-wide sequence counter."""

from __future__ import annotations

from pycriteria.criteria.order import SequenceCounter


class CriteriaContext:
    """Shared state for every criteria node built against it.

    Nodes built without an explicit context share :meth:`default`, so orders
    and cursors declared anywhere in the process receive strictly increasing
    sequence ids. Pass a dedicated context to isolate a group of graphs,
    e.g. in tests.
    """

    _default: CriteriaContext | None = None

    def __init__(self, sequence: SequenceCounter | None = None) -> None:
        self.sequence = sequence if sequence is not None else SequenceCounter()

    @classmethod
    def default(cls) -> CriteriaContext:
        """Return the process-wide context."""
        if cls._default is None:
            cls._default = cls()
        return cls._default

    def next_sequence_id(self) -> int:
        return self.sequence.next()


CriteriaContext._default = CriteriaContext()
