"""Configuration loading and validation."""
import os
import re
from collections import Counter
from pathlib import Path
from typing import List

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class LoggingConfig(BaseModel):
    """Logging settings applied by the command line entry point."""

    level: str = Field("INFO", description="Root log level")
    format: str = Field(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="logging.Formatter format string",
    )

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(
                f"Invalid log level '{v}'. Must be one of: {', '.join(LOG_LEVELS)}"
            )
        return level


class RegistryConfig(BaseModel):
    """Registry configuration."""

    seed_tags: List[str] = Field(
        default_factory=list,
        description="Tags registered when the registry is created",
    )
    strict_mutations: bool = Field(
        False,
        description=(
            "Raise on unresolved identifiers in context/option/decision "
            "mutations instead of silently ignoring them"
        ),
    )

    @field_validator("seed_tags")
    @classmethod
    def resolve_seed_tags(cls, v: List[str]) -> List[str]:
        """Resolve ${ENV_VAR} references and reject empty or duplicate tags.

        Raises:
            ValueError: If a referenced environment variable is not set, or
                a tag is empty or listed twice.
        """
        pattern = r"\$\{([^}]+)\}"

        def replacer(match):
            env_var = match.group(1)
            value = os.getenv(env_var)
            if value is None:
                raise ValueError(
                    f"Environment variable '{env_var}' is not set. "
                    f"Required for seed_tags configuration."
                )
            return value

        resolved = [re.sub(pattern, replacer, tag) for tag in v]

        if any(tag == "" for tag in resolved):
            raise ValueError("seed_tags must not contain empty tags")

        duplicates = sorted(
            tag for tag, count in Counter(resolved).items() if count > 1
        )
        if duplicates:
            raise ValueError(f"Duplicate seed tags: {', '.join(duplicates)}")

        return resolved


class Config(BaseModel):
    """Root configuration model."""

    version: str
    registry: RegistryConfig = Field(default_factory=RegistryConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def load_config(path: str = "config.yaml") -> Config:
    """Read registry settings (seed tags, mutation mode, logging) from YAML.

    A .env file in the working directory is loaded first so seed tags can
    refer to ${ENV_VAR} values. An empty file is validated as an empty
    mapping and fails on the missing version.

    Raises:
        FileNotFoundError: If the config file does not exist
        ValidationError: If the settings are invalid
    """
    load_dotenv()

    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(config_path, "r") as f:
        data = yaml.safe_load(f)

    return Config(**(data or {}))
