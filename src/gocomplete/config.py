"""Completion settings.

Parses the editor's ``go.*`` settings (JSON) into a frozen snapshot that is
passed along with every completion request.
"""

import json
import os
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from gocomplete.logger import get_logger

logger = get_logger("config")

__all__ = ["SuggestConfig", "load_config", "CONFIG_ENV_VAR"]

CONFIG_ENV_VAR = "GOCOMPLETE_CONFIG"


class SuggestConfig(BaseModel):
    """Configuration snapshot for one completion request.

    Field aliases are the editor's camelCase setting names, so a settings
    file can be validated directly.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    autocomplete_unimported_packages: bool = Field(
        False,
        alias="autocompleteUnimportedPackages",
        description="Offer packages that are not imported yet",
    )
    use_code_snippets_on_function_suggest: bool = Field(
        False,
        alias="useCodeSnippetsOnFunctionSuggest",
        description="Complete functions with their parameters, including types",
    )
    use_code_snippets_on_function_suggest_without_type: bool = Field(
        False,
        alias="useCodeSnippetsOnFunctionSuggestWithoutType",
        description="Complete functions with parameter names only",
    )
    gocode_auto_build: str = Field(
        "false",
        alias="gocodeAutoBuild",
        description="Value for gocode's autobuild option",
    )
    gocode_package_lookup_mode: str = Field(
        "go",
        alias="gocodePackageLookupMode",
        description="Value for gocode's package-lookup-mode option (go, gb, bzl)",
    )
    gocode_path: Optional[str] = Field(
        None,
        alias="gocodePath",
        description="Explicit path to the gocode executable",
    )
    tools_gopath: Optional[str] = Field(
        None,
        alias="toolsGopath",
        description="GOPATH used when running Go tools",
    )
    analyzer_timeout: float = Field(
        10.0,
        alias="analyzerTimeout",
        gt=0,
        description="Seconds to wait for gocode before giving up",
    )

    @field_validator("gocode_auto_build", mode="before")
    @classmethod
    def _render_bool(cls, value: Any) -> Any:
        # Editors store autobuild as a boolean; gocode expects "true"/"false".
        if isinstance(value, bool):
            return "true" if value else "false"
        return value

    @property
    def snippets_enabled(self) -> bool:
        """Either function snippet mode is switched on."""
        return self.use_code_snippets_on_function_suggest or self.use_code_snippets_on_function_suggest_without_type


def load_config(config_path: Optional[str | Path] = None) -> SuggestConfig:
    """
    Load completion settings from a JSON file.

    The file may hold the settings at top level or under a ``go`` key
    (``{"go": {"autocompleteUnimportedPackages": true}}``); keys prefixed with
    ``go.`` are accepted too.

    Args:
        config_path: Path to the JSON file. If None, ``GOCOMPLETE_CONFIG`` is
            consulted; with neither set the defaults are returned.

    Returns:
        SuggestConfig: Parsed configuration

    Raises:
        FileNotFoundError: If the configuration file doesn't exist
        json.JSONDecodeError: If the JSON file is invalid
        ValidationError: If the configuration structure is invalid
    """
    if config_path is None:
        config_path = os.getenv(CONFIG_ENV_VAR)
        if not config_path:
            logger.debug("No settings file configured, using defaults")
            return SuggestConfig()

    config_path = Path(config_path).expanduser()
    if not config_path.exists():
        error_msg = f"Settings file not found: {config_path}"
        logger.error(error_msg)
        raise FileNotFoundError(error_msg)

    logger.info(f"Loading settings from: {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in settings file {config_path}: {e}")
        raise

    section = data.get("go", data) if isinstance(data, dict) else data
    if isinstance(section, dict):
        section = {key.removeprefix("go."): value for key, value in section.items()}

    try:
        config = SuggestConfig.model_validate(section)
    except ValidationError as e:
        logger.error(f"Invalid settings structure in {config_path}: {e}")
        raise

    logger.debug(f"Settings loaded: {config.model_dump(by_alias=True)}")
    return config
