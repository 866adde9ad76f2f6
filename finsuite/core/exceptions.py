"""Exceptions raised by FinSuite."""


class FinSuiteError(Exception):
    """Base class for all FinSuite errors."""


class ConfigNotFoundError(FinSuiteError):
    """Raised when an explicitly requested config file does not exist."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Config file not found: {path}")


class ConfigError(FinSuiteError):
    """Raised when the config file cannot be parsed or validated."""


class DataSourceError(FinSuiteError):
    """Raised when the record store cannot answer a query.

    Covers connection, transport and query failures. The dashboard data
    provider recovers from it by switching to sample data.
    """


class SeriesShapeError(FinSuiteError, ValueError):
    """Raised when a labeled chart series has datasets of the wrong length.

    Attributes:
        datasets: Names of the offending datasets.
        expected: Number of labels in the series.
    """

    def __init__(self, datasets: list[str], expected: int):
        self.datasets = datasets
        self.expected = expected
        names = ", ".join(datasets)
        super().__init__(
            f"Dataset length does not match {expected} labels: {names}"
        )
