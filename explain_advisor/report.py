import io
from typing import TextIO

from explain_advisor.explain import advise
from explain_advisor.models import ExplainResult

SECTION_RULE = "-" * 28
STATEMENT_RULE = "=" * 28


def write_report(
    sink: TextIO,
    statement: str,
    result: ExplainResult,
    advice: list[str] | None = None,
) -> None:
    """Write the report block for one statement to ``sink``.

    ``advice`` defaults to ``advise(result)``.
    """
    if advice is None:
        advice = advise(result)

    block = result.query_block
    table = block.table
    cost = table.cost_info

    lines = [
        f"Executed SQL: {statement}",
        SECTION_RULE,
        "Execution Plan:",
        f"Select ID: {block.select_id}",
        f"Query Cost: {block.cost_info.query_cost}",
        SECTION_RULE,
        "Table Scan:",
        f"Table Name: {table.table_name}",
        f"Access Type: {table.access_type}",
        f"Rows Examined Per Scan: {table.rows_examined_per_scan}",
        f"Rows Produced Per Join: {table.rows_produced_per_join}",
        f"Filtered (%): {table.filtered}",
        SECTION_RULE,
        "Cost Info:",
        f"Read Cost: {cost.read_cost}",
        f"Eval Cost: {cost.eval_cost}",
        f"Prefix Cost: {cost.prefix_cost}",
        f"Data Read Per Join: {cost.data_read_per_join}",
        SECTION_RULE,
        "Advice:",
    ]
    lines.extend(f" * {line}" for line in advice)
    lines.append(SECTION_RULE)
    lines.append("Used Columns:")
    lines.extend(f" - {column}" for column in table.used_columns)
    lines.append("")
    lines.append(STATEMENT_RULE)
    lines.append("")

    sink.write("\n".join(lines) + "\n")


def format_report(
    statement: str,
    result: ExplainResult,
    advice: list[str] | None = None,
) -> str:
    buf = io.StringIO()
    write_report(buf, statement, result, advice)
    return buf.getvalue()
