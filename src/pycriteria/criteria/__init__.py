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
"""Criteria: data-source-agnostic query descriptions and their traversal."""

from pycriteria.criteria.context import CriteriaContext
from pycriteria.criteria.criteria import Criteria, CriteriaKind
from pycriteria.criteria.cursor import Cursor
from pycriteria.criteria.factory import CriteriaFactory
from pycriteria.criteria.filter import UNSET, Filter
from pycriteria.criteria.filter_group import FilterGroup
from pycriteria.criteria.join import JoinDetails, JoinParameters, PivotJoin, RelationResolver, SimpleJoin
from pycriteria.criteria.operators import FilterOperator, LogicalOperator
from pycriteria.criteria.order import Order, OrderDirection, SequenceCounter
from pycriteria.criteria.ports.translator import (
    CriteriaTranslator,
    CriteriaVisitor,
    OrderingTerm,
    cursor_boundary,
    merge_orders,
)
from pycriteria.criteria.registry import SchemaRegistry
from pycriteria.criteria.schema import (
    CriteriaSchema,
    PivotField,
    RelationConfig,
    RelationKind,
    SelectType,
)

__all__ = [
    # Schema
    "CriteriaSchema",
    "PivotField",
    "RelationConfig",
    "RelationKind",
    "SchemaRegistry",
    "SelectType",
    # Nodes
    "Criteria",
    "CriteriaContext",
    "CriteriaFactory",
    "CriteriaKind",
    # Filters
    "UNSET",
    "Filter",
    "FilterGroup",
    "FilterOperator",
    "LogicalOperator",
    # Ordering
    "Cursor",
    "Order",
    "OrderDirection",
    "SequenceCounter",
    # Joins
    "JoinDetails",
    "JoinParameters",
    "PivotJoin",
    "RelationResolver",
    "SimpleJoin",
    # Translation
    "CriteriaTranslator",
    "CriteriaVisitor",
    "OrderingTerm",
    "cursor_boundary",
    "merge_orders",
]
