import json
from pathlib import Path
from typing import Optional, List, Dict, Any

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import PithError, ErrorCode

CONFIG_FILE_NAME = "pith.config.json"


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_prefix="PITH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Storage Configuration
    data_dir: str = Field(default=".pith/data")
    store_file: str = Field(default="graph.json")

    # Graph Builder Configuration
    test_command_template: str = Field(default="npm test -- {path}")
    index_file_names: str = Field(default="index.ts,index.tsx,index.js,index.jsx")
    tests_dir_names: str = Field(default="__tests__")
    source_extensions: str = Field(default=".ts,.tsx,.js,.jsx,.mts,.cts,.mjs,.cjs")
    min_module_members: int = Field(default=3, ge=1)

    # Concurrency Configuration
    max_concurrency: int = Field(default=5, ge=1)

    # Logging Configuration
    log_level: str = Field(default="INFO")
    log_file: str = Field(default="logs/pith.log")

    @property
    def index_file_names_list(self) -> List[str]:
        """Get index file names as a list."""
        return _split_csv(self.index_file_names)

    @property
    def tests_dir_names_list(self) -> List[str]:
        """Get tests directory names as a list."""
        return _split_csv(self.tests_dir_names)

    @property
    def source_extensions_list(self) -> List[str]:
        """Get source extensions as a list."""
        return _split_csv(self.source_extensions)

    @property
    def store_path(self) -> Path:
        """Get the path of the JSON node store."""
        return Path(self.data_dir) / self.store_file

    @property
    def log_dir(self) -> Path:
        """Get log directory path."""
        return Path(self.log_file).parent

    def ensure_directories(self):
        """Ensure necessary directories exist."""
        self.log_dir.mkdir(parents=True, exist_ok=True)


def _split_csv(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


# Keys accepted in the "builder" section of pith.config.json
_BUILDER_KEYS = {
    "testCommand": "test_command_template",
    "indexFiles": "index_file_names",
    "testsDirs": "tests_dir_names",
    "sourceExtensions": "source_extensions",
    "minModuleMembers": "min_module_members",
    "maxConcurrency": "max_concurrency",
}


def _overrides_from_file(user_config: Dict[str, Any]) -> Dict[str, Any]:
    """Flatten a pith.config.json document into Settings keyword arguments."""
    overrides: Dict[str, Any] = {}

    output = user_config.get("output", {})
    if not isinstance(output, dict):
        raise PithError(ErrorCode.CONFIG_ERROR, '"output" must be an object')
    if output.get("dataDir"):
        overrides["data_dir"] = output["dataDir"]

    builder = user_config.get("builder", {})
    if not isinstance(builder, dict):
        raise PithError(ErrorCode.CONFIG_ERROR, '"builder" must be an object')
    for key, field_name in _BUILDER_KEYS.items():
        if key not in builder:
            continue
        value = builder[key]
        # List values are stored comma-separated, like the env representation
        if isinstance(value, list):
            if not all(isinstance(item, str) for item in value):
                raise PithError(ErrorCode.CONFIG_ERROR, f'"builder.{key}" must be a list of strings')
            value = ",".join(value)
        overrides[field_name] = value

    logging_section = user_config.get("logging", {})
    if not isinstance(logging_section, dict):
        raise PithError(ErrorCode.CONFIG_ERROR, '"logging" must be an object')
    if logging_section.get("level"):
        overrides["log_level"] = logging_section["level"]
    if logging_section.get("file"):
        overrides["log_file"] = logging_section["file"]

    return overrides


def load_settings(root_dir: Optional[str] = None) -> Settings:
    """
    Load settings, overlaying pith.config.json from root_dir when present.

    Values from the config file take priority over environment variables.
    Raises PithError(CONFIG_ERROR) if the file exists but is invalid.
    """
    config_path = Path(root_dir or Path.cwd()) / CONFIG_FILE_NAME
    if not config_path.exists():
        return Settings()

    try:
        user_config = json.loads(config_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise PithError(
            ErrorCode.CONFIG_ERROR,
            f"Failed to parse {CONFIG_FILE_NAME}: {e}",
        ) from e

    if not isinstance(user_config, dict):
        raise PithError(ErrorCode.CONFIG_ERROR, f"{CONFIG_FILE_NAME} must contain a JSON object")

    try:
        return Settings(**_overrides_from_file(user_config))
    except ValidationError as e:
        raise PithError(
            ErrorCode.CONFIG_ERROR,
            f"Invalid value in {CONFIG_FILE_NAME}: {e.errors()[0]['msg']}",
        ) from e


settings = Settings()
settings.ensure_directories()
