import logging
from pathlib import Path

from pydantic import TypeAdapter, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from explain_advisor.errors import ConfigParseError, ConfigReadError
from explain_advisor.template import KvTemplate

log = logging.getLogger(__name__)

DSN_TEMPLATE = KvTemplate("${username}:${password}@tcp(${host}:${port})/${database}")

_CONNECT_CONFIG = TypeAdapter(dict[str, str])


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="EXPLAIN_ADVISOR_",
        env_file=".env",
        extra="ignore",
    )

    connect_config: Path = Path("mysql-connect.json")
    sql_file: Path = Path("check.sql")
    output_file: Path = Path("mysql-analysis-output.txt")
    output_to_console: bool = False
    connect_timeout_s: int = 10
    log_level: str = "INFO"


def load_connect_config(path: str | Path) -> dict[str, str]:
    """Read the connection credentials file as a flat string-to-string mapping."""
    path = Path(path)
    try:
        raw = path.read_bytes()
    except OSError as exc:
        raise ConfigReadError(f"Cannot read connection config {path}: {exc}") from exc

    try:
        config = _CONNECT_CONFIG.validate_json(raw)
    except ValidationError as exc:
        raise ConfigParseError(
            f"Connection config {path} must be a JSON object of string values: {exc}"
        ) from exc

    log.debug("Loaded connection config %s (keys: %s)", path, ", ".join(sorted(config)))
    return config


def render_dsn(config: dict[str, str]) -> str:
    return DSN_TEMPLATE.render(config)


settings = Settings()
