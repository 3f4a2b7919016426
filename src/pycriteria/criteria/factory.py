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
"""CriteriaFactory: entry points for building root and join criteria."""

from __future__ import annotations

from pycriteria.criteria.context import CriteriaContext
from pycriteria.criteria.criteria import Criteria, CriteriaKind
from pycriteria.criteria.schema import CriteriaSchema


class CriteriaFactory:
    """Builds criteria nodes bound to a schema.

    Every method takes an optional :class:`CriteriaContext`; without one the
    node shares the process-wide context.
    """

    @classmethod
    def get_criteria(cls, schema: CriteriaSchema, context: CriteriaContext | None = None) -> Criteria:
        """Root criteria: the entity the query starts from."""
        return Criteria(schema, CriteriaKind.ROOT, context=context)

    @classmethod
    def get_inner_join_criteria(cls, schema: CriteriaSchema, context: CriteriaContext | None = None) -> Criteria:
        return Criteria(schema, CriteriaKind.INNER_JOIN, context=context)

    @classmethod
    def get_left_join_criteria(cls, schema: CriteriaSchema, context: CriteriaContext | None = None) -> Criteria:
        return Criteria(schema, CriteriaKind.LEFT_JOIN, context=context)

    @classmethod
    def get_outer_join_criteria(cls, schema: CriteriaSchema, context: CriteriaContext | None = None) -> Criteria:
        return Criteria(schema, CriteriaKind.OUTER_JOIN, context=context)
