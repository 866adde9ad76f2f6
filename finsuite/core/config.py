"""Configuration loading.

A FinSuite directory holds a ``finsuite.yaml`` file with display and data
source settings. Everything has a default, so the file is optional unless a
path is given explicitly.
"""

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError

from finsuite.core.exceptions import ConfigError, ConfigNotFoundError
from finsuite.core.models import ChartKind

CONFIG_FILENAME = "finsuite.yaml"
DATABASE_URL_ENV = "FINSUITE_DATABASE_URL"


class ChartSettings(BaseModel):
    """How one dashboard card draws its chart."""

    type: ChartKind = ChartKind.BAR
    color: str = "primary"


class FinSuiteConfig(BaseModel):
    """Settings for a FinSuite dashboard.

    Paths are resolved against ``base_dir``, the directory holding the
    config file (or the working directory when no file is used).
    """

    name: str = Field(default="FinSuite", min_length=1)
    currency: str = Field(default="USD", min_length=3, max_length=3, pattern=r"^[A-Z]{3}$")

    expense_window_days: int = Field(default=30, ge=1)
    investment_window_days: int = Field(default=180, ge=1)

    database_url: str | None = None  # None = sqlite file under .cache/
    reports_dir: str = "reports"

    theme: str = Field(default="light", pattern=r"^(light|dark)$")
    expense_chart: ChartSettings = Field(
        default_factory=lambda: ChartSettings(type=ChartKind.BAR, color="indigo")
    )
    investment_chart: ChartSettings = Field(
        default_factory=lambda: ChartSettings(type=ChartKind.LINE, color="emerald")
    )
    show_diagnostics: bool = False

    log_level: str = "INFO"

    base_dir: Path = Field(default_factory=Path.cwd, exclude=True)

    @property
    def resolved_database_url(self) -> str:
        """Database URL with the environment override applied."""
        env_url = os.getenv(DATABASE_URL_ENV)
        if env_url:
            return env_url
        if self.database_url:
            return self.database_url
        return f"sqlite:///{self.base_dir / '.cache' / 'finsuite.db'}"

    @property
    def reports_path(self) -> Path:
        return self.base_dir / self.reports_dir


def load_config(path: Path | None = None) -> FinSuiteConfig:
    """Load configuration from a YAML file.

    Args:
        path: Config file or directory containing ``finsuite.yaml``.
              If None, looks in the current directory and falls back
              to defaults when nothing is there.

    Returns:
        Validated FinSuiteConfig.

    Raises:
        ConfigNotFoundError: If an explicit path does not exist.
        ConfigError: If the file is not valid YAML or fails validation.
    """
    if path is None:
        config_file = Path.cwd() / CONFIG_FILENAME
        if not config_file.exists():
            return FinSuiteConfig(base_dir=Path.cwd())
    else:
        config_file = path / CONFIG_FILENAME if path.is_dir() else path
        if not config_file.exists():
            raise ConfigNotFoundError(str(config_file))

    try:
        with open(config_file, encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_file}: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigError(f"{config_file} must contain a mapping")

    try:
        return FinSuiteConfig(**{**raw, "base_dir": config_file.parent.resolve()})
    except ValidationError as e:
        raise ConfigError(f"Invalid config in {config_file}: {e}") from e
