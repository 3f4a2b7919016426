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
"""Criteria configuration properties."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from pycriteria.core.config import config_properties


@config_properties(prefix="pycriteria.criteria")
class CriteriaProperties(BaseModel):
    """Configuration for the criteria engine (pycriteria.criteria.*).

    ``schemas`` holds raw schema documents, each one a mapping accepted by
    :meth:`~pycriteria.criteria.schema.CriteriaSchema.from_dict`. Their
    content is validated when the registry builds them.
    """

    model_config = ConfigDict(extra="forbid")

    schemas: list[dict[str, Any]] = Field(default_factory=list)
    validate_relations: bool = True
