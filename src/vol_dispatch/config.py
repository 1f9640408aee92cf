"""
Configuration Management

Handles batch settings with precedence:
CLI Flags > Environment Variables > Defaults
"""

import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, ValidationInfo, field_validator

from .exceptions import ConfigError


# Environment variable names
ENV_TOOL = "VOL_DISPATCH_TOOL"
ENV_IMAGE = "VOL_DISPATCH_IMAGE"
ENV_MODULES = "VOL_DISPATCH_MODULES"
ENV_OUTPUT_DIR = "VOL_DISPATCH_OUTPUT_DIR"
ENV_PARALLELISM = "VOL_DISPATCH_PARALLELISM"
ENV_LOG_LEVEL = "VOL_DISPATCH_LOG_LEVEL"

DEFAULT_LOG_LEVEL = "INFO"


def default_parallelism() -> int:
    """Logical CPU count minus one, never less than 1."""
    return max((os.cpu_count() or 1) - 1, 1)


def get_log_level() -> str:
    """Get log level name from environment or default."""
    return os.environ.get(ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL).upper()


class BatchSettings(BaseModel):
    """Validated settings for one batch."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    tool_path: str
    image_path: str
    modules_path: str
    output_dir: str
    parallelism: Optional[int] = Field(default=None, ge=1)

    @field_validator("tool_path", "image_path", "modules_path", "output_dir")
    @classmethod
    def _require_value(cls, value: str, info: ValidationInfo) -> str:
        value = value.strip()
        if not value:
            raise ValueError(f"{info.field_name} cannot be empty")
        return value

    @property
    def effective_parallelism(self) -> int:
        return self.parallelism if self.parallelism is not None else default_parallelism()

    @property
    def output_path(self) -> Path:
        return Path(self.output_dir).expanduser()

    @property
    def modules_file(self) -> Path:
        return Path(self.modules_path).expanduser()


def _pick(cli_value, env_name: str):
    """CLI value if given, else the environment variable, else None."""
    if cli_value not in (None, ""):
        return cli_value
    env_value = os.environ.get(env_name)
    if env_value not in (None, ""):
        return env_value
    return None


def load_settings(
    cli_tool: Optional[str] = None,
    cli_image: Optional[str] = None,
    cli_modules: Optional[str] = None,
    cli_output_dir: Optional[str] = None,
    cli_parallelism: Optional[int] = None,
) -> BatchSettings:
    """
    Load batch settings with CLI > ENV > DEFAULT precedence.

    Raises:
        ConfigError: If a required setting is missing or a value is invalid
    """
    values = {
        "tool_path": _pick(cli_tool, ENV_TOOL),
        "image_path": _pick(cli_image, ENV_IMAGE),
        "modules_path": _pick(cli_modules, ENV_MODULES),
        "output_dir": _pick(cli_output_dir, ENV_OUTPUT_DIR),
    }

    missing = [
        flag
        for flag, key in (("-p", "tool_path"), ("-i", "image_path"), ("-m", "modules_path"), ("-o", "output_dir"))
        if values[key] is None
    ]
    if missing:
        raise ConfigError(
            f"All flags (-p, -i, -m, -o) are required. Missing: {', '.join(missing)}"
        )

    parallelism = _pick(cli_parallelism, ENV_PARALLELISM)
    if parallelism is not None:
        values["parallelism"] = parallelism

    try:
        return BatchSettings(**values)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise ConfigError(f"Invalid settings: {problems}") from e
