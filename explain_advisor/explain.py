"""EXPLAIN plan parsing and rule-based optimization advice."""

import logging
from enum import Enum

from pydantic import ValidationError

from explain_advisor.errors import PlanParseError
from explain_advisor.models import ExplainResult

log = logging.getLogger(__name__)

# Rows examined per scan above which the plan is flagged regardless of access type
HIGH_SCAN_ROWS_THRESHOLD = 1000


class AccessType(str, Enum):
    ALL = "ALL"
    INDEX = "index"
    RANGE = "range"
    REF = "ref"
    CONST = "const"
    UNIQUE_SUBQUERY = "unique_subquery"
    INDEX_SUBQUERY = "index_subquery"
    UNKNOWN = "unknown"

    @classmethod
    def from_code(cls, code: str) -> "AccessType":
        """Map the server's ``access_type`` string onto a variant, UNKNOWN if unrecognized."""
        try:
            return cls(code)
        except ValueError:
            return cls.UNKNOWN


ACCESS_TYPE_ADVICE: dict[AccessType, str] = {
    AccessType.ALL: (
        "Access type ALL: full table scan. Add an index unless reading the whole table is required."
    ),
    AccessType.INDEX: "Access type index: full index scan. This can still be optimized.",
    AccessType.RANGE: (
        "Access type range: index range scan. Consider adding a more suitable index."
    ),
    AccessType.REF: (
        "Access type ref: rows are looked up through a non-unique or unique index. "
        "Usually needs no optimization."
    ),
    AccessType.CONST: (
        "Access type const: single-row lookup by primary or unique key. "
        "Already the optimal access method."
    ),
    AccessType.UNIQUE_SUBQUERY: (
        "Access type unique_subquery: a unique index is used inside a subquery. "
        "Consider rewriting the subquery as a join."
    ),
    AccessType.INDEX_SUBQUERY: (
        "Access type index_subquery: a non-unique index is used inside a subquery. "
        "Consider rewriting the subquery as a join."
    ),
    AccessType.UNKNOWN: (
        "Unknown access type. Analyze the execution plan further and optimize the query by hand."
    ),
}

HIGH_SCAN_VOLUME_ADVICE = (
    "Many rows are examined per scan. The query may need optimizing or an additional index."
)


def parse_explain_json(explain_json: str | bytes) -> ExplainResult:
    """Parse the JSON document returned by ``EXPLAIN FORMAT=json``.

    Only the top-level ``query_block.table`` of a single-table plan is
    modeled. Join plans nest their tables under ``nested_loop`` and parse
    with the table fields left at their zero values.
    """
    try:
        return ExplainResult.model_validate_json(explain_json)
    except ValidationError as exc:
        raise PlanParseError(f"Invalid EXPLAIN JSON: {exc}") from exc


def access_type_advice(access_type: str) -> str:
    return ACCESS_TYPE_ADVICE[AccessType.from_code(access_type)]


def advise(result: ExplainResult) -> list[str]:
    """Return the advice lines for a parsed plan.

    The access-type advice always comes first; the scan-volume advice is
    appended when rows examined per scan exceed HIGH_SCAN_ROWS_THRESHOLD.
    """
    table = result.query_block.table
    advice = [access_type_advice(table.access_type)]
    if table.rows_examined_per_scan > HIGH_SCAN_ROWS_THRESHOLD:
        log.debug(
            "High scan volume on %s (%d rows per scan)",
            table.table_name or "<unnamed>",
            table.rows_examined_per_scan,
        )
        advice.append(HIGH_SCAN_VOLUME_ADVICE)
    return advice
