"""
Leakscan Settings

Environment variables use the LEAKSCAN_ prefix.
Example: LEAKSCAN_SOURCE_ROOT, LEAKSCAN_OUTPUT_FILE, LEAKSCAN_WORKERS

Mappings are passed as JSON:
    LEAKSCAN_MODULE_RULES='{"com.acme.billing": "billing"}'
"""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from codegraph_leakscan.infra.logging import LOG_FORMATS, LOG_LEVELS

ARTEMIS_BASE_PACKAGE = "de.tum.cit.aet.artemis"

ARTEMIS_MODULES = (
    "assessment",
    "athena",
    "atlas",
    "buildagent",
    "communication",
    "config",
    "core",
    "exam",
    "exercise",
    "fileupload",
    "hyperion",
    "iris",
    "lecture",
    "lti",
    "modeling",
    "nebula",
    "plagiarism",
    "programming",
    "quiz",
    "text",
    "tutorialgroup",
)


def default_module_rules() -> dict[str, str]:
    """Package prefix -> module label for every Artemis server module."""
    return {f"{ARTEMIS_BASE_PACKAGE}.{module}": module for module in ARTEMIS_MODULES}


class LeakScanSettings(BaseSettings):
    """
    Settings for a single scan run.

    CLI options override these values; everything else comes from the
    environment or an optional .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="LEAKSCAN_",
        extra="ignore",
    )

    source_root: Path = Field(Path("../../artemis/src/main/java"), description="Root of the Java source tree")
    output_file: Path = Field(Path("violations.json"), description="Where the JSON report is written")
    module_rules: dict[str, str] = Field(default_factory=default_module_rules, description="Package prefix -> module")
    workers: int = Field(1, description="Parser threads (1 = sequential)")
    assume_local_namespace: bool = Field(
        True,
        description="Resolve unimported, non-entity names into the current package",
    )
    log_level: str = Field("INFO", description="Logging level")
    log_format: str = Field("console", description="console or json")

    @field_validator("workers")
    @classmethod
    def _validate_workers(cls, value: int) -> int:
        if value < 1:
            raise ValueError("workers must be >= 1")
        return value

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        value = value.upper()
        if value not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return value

    @field_validator("log_format")
    @classmethod
    def _validate_log_format(cls, value: str) -> str:
        value = value.lower()
        if value not in LOG_FORMATS:
            raise ValueError("log_format must be 'console' or 'json'")
        return value
