"""Engine configuration."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DefactoSettings(BaseSettings):
    """Runtime settings for the fact engine.

    Loads from environment variables automatically:
        DEFACTO_COLOR, DEFACTO_SHOW_LOCALS, DEFACTO_RESTORE_PARENT_HANDLER, DEFACTO_LOG_LEVEL
    """

    color: bool = Field(default=True, description="Wrap console output in ANSI color sequences")
    show_locals: bool = Field(default=False, description="Show frame locals in error tracebacks")
    restore_parent_handler: bool = Field(
        default=True,
        description="Pop a suite's handler when the suite finishes so the parent suite receives results again",
    )
    log_level: str = Field(default="WARNING", description="Log level used by the command-line driver")

    model_config = SettingsConfigDict(
        extra="ignore",
        env_prefix="DEFACTO_",
    )


@lru_cache(maxsize=1)
def get_settings() -> DefactoSettings:
    return DefactoSettings()
