"""Error kinds raised along the analysis pipeline.

Every error is fatal to a full run; callers that drive the pipeline
themselves can catch ``AdvisorError`` and decide otherwise.
"""


class AdvisorError(Exception):
    """Base class for all pipeline failures."""


class ConfigReadError(AdvisorError):
    pass


class ConfigParseError(AdvisorError):
    pass


class DatabaseConnectionError(AdvisorError):
    pass


class SqlFileReadError(AdvisorError):
    pass


class QueryError(AdvisorError):
    pass


class RowScanError(AdvisorError):
    pass


class PlanParseError(AdvisorError):
    pass


class OutputCreateError(AdvisorError):
    pass
