import argparse
import logging
import sys
from collections.abc import Iterable
from contextlib import ExitStack
from pathlib import Path
from typing import Any, TextIO

from explain_advisor import __version__, db
from explain_advisor.config import Settings, load_connect_config, render_dsn, settings
from explain_advisor.errors import AdvisorError, OutputCreateError, SqlFileReadError
from explain_advisor.explain import advise, parse_explain_json
from explain_advisor.report import write_report
from explain_advisor.statements import split_sql_statements

log = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def read_statements(path: Path) -> list[str]:
    try:
        sql_text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise SqlFileReadError(f"Cannot read SQL file {path}: {exc}") from exc
    return split_sql_statements(sql_text)


def analyze_statements(conn: Any, statements: Iterable[str], sink: TextIO) -> int:
    """Explain, parse, advise and report each statement in order.

    Stops at the first failure; returns the number of reports written.
    """
    count = 0
    for statement in statements:
        log.debug("Explaining: %s", statement)
        explain_json = db.fetch_explain_json(conn, statement)
        result = parse_explain_json(explain_json)
        write_report(sink, statement, result, advise(result))
        count += 1
    return count


def _open_sink(stack: ExitStack, cfg: Settings) -> TextIO:
    if cfg.output_to_console:
        return sys.stdout
    try:
        sink = open(cfg.output_file, "w", encoding="utf-8")
    except OSError as exc:
        raise OutputCreateError(f"Cannot create output file {cfg.output_file}: {exc}") from exc
    return stack.enter_context(sink)


def run(cfg: Settings | None = None) -> int:
    """Run the whole pipeline. Raises AdvisorError on the first failure."""
    if cfg is None:
        cfg = settings

    connect_config = load_connect_config(cfg.connect_config)
    dsn = render_dsn(connect_config)

    with ExitStack() as stack:
        conn = stack.enter_context(db.connect(dsn, timeout_s=cfg.connect_timeout_s))
        statements = read_statements(cfg.sql_file)
        log.info("Loaded %d statements from %s", len(statements), cfg.sql_file)
        sink = _open_sink(stack, cfg)
        count = analyze_statements(conn, statements, sink)

    destination = "stdout" if cfg.output_to_console else str(cfg.output_file)
    log.info("Wrote %d reports to %s", count, destination)
    return count


def _build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="explain-advisor",
        description="Annotate MySQL EXPLAIN plans for a file of SQL statements.",
    )
    ap.add_argument("--config", type=Path, help="Connection config JSON (default: %(default)s)",
                    default=settings.connect_config)
    ap.add_argument("--sql", type=Path, help="SQL file to analyze (default: %(default)s)",
                    default=settings.sql_file)
    ap.add_argument("--output", type=Path, help="Report file (default: %(default)s)",
                    default=settings.output_file)
    ap.add_argument("--stdout", action="store_true", default=settings.output_to_console,
                    help="Write the report to standard output instead of a file")
    ap.add_argument("--log-level", type=str.upper, choices=LOG_LEVELS, default=settings.log_level,
                    help="Logging level (default: %(default)s)")
    ap.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return ap


def main(argv: list[str] | None = None) -> int:
    ap = _build_parser()
    args = ap.parse_args(argv)
    # argparse does not check choices against a default taken from the environment
    if args.log_level not in LOG_LEVELS:
        ap.error(f"invalid log level {args.log_level!r} (choose from {', '.join(LOG_LEVELS)})")

    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    cfg = settings.model_copy(update={
        "connect_config": args.config,
        "sql_file": args.sql,
        "output_file": args.output,
        "output_to_console": args.stdout,
        "log_level": args.log_level,
    })

    try:
        run(cfg)
    except AdvisorError as exc:
        log.error("%s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
