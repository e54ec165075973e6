"""Runtime configuration."""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ExpectationsSettings(BaseSettings):
    """Settings for running expectations.

    Loaded from ``EXPECTATIONS_*`` environment variables; explicit keyword
    arguments take precedence.

    Attributes
    ----------
    verbosity
        ``-1`` prints failures only, ``0`` failures and summary, ``1`` also
        one line per passing case.
    pattern
        Regular expression a namespace must fully match to be run by
        ``run_all_tests``. ``None`` runs every registered namespace.
    run_on_exit
        Whether the exit hook installed by ``install_exit_hook`` runs the
        registered expectations when the interpreter exits.
    log_level
        Level passed to ``logging.basicConfig`` by the CLI.
    show_stack_trace
        Whether the console reporter prints the pruned stack trace of errors.
    tracing
        Wrap each case in an OpenTelemetry span.
    """

    verbosity: int = Field(default=0, ge=-1, le=2)
    pattern: str | None = None
    run_on_exit: bool = False
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    show_stack_trace: bool = True
    tracing: bool = False

    model_config = SettingsConfigDict(
        extra="forbid",
        env_prefix="EXPECTATIONS_",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_log_level(cls, v: object) -> object:
        return v.upper() if isinstance(v, str) else v
