"""Value objects for a single-table MySQL ``EXPLAIN FORMAT=json`` document.

Field names match the JSON keys the server emits. Cost figures arrive as
strings (``"1.00"``) and are kept that way. Keys outside this shape are
ignored, and keys the server leaves out or sets to null fall back to zero
values.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr, model_validator


class _PlanModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        # null means "use the default", same as an absent key
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


class CostInfo(_PlanModel):
    query_cost: StrictStr = ""
    read_cost: StrictStr = ""
    eval_cost: StrictStr = ""
    prefix_cost: StrictStr = ""
    data_read_per_join: StrictStr = ""


class TableInfo(_PlanModel):
    table_name: StrictStr = ""
    access_type: StrictStr = ""
    rows_examined_per_scan: StrictInt = 0
    rows_produced_per_join: StrictInt = 0
    filtered: StrictStr = ""
    cost_info: CostInfo = Field(default_factory=CostInfo)
    used_columns: tuple[StrictStr, ...] = ()


class QueryBlock(_PlanModel):
    select_id: StrictInt = 0
    cost_info: CostInfo = Field(default_factory=CostInfo)
    table: TableInfo = Field(default_factory=TableInfo)


class ExplainResult(_PlanModel):
    query_block: QueryBlock = Field(default_factory=QueryBlock)
