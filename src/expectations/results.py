"""Comparison result records and the run summary."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field, computed_field

Raw = tuple[str | None, str] | None


@dataclass(frozen=True)
class Pass:
    """The two values matched."""

    raw: Raw = None


@dataclass(frozen=True)
class Fail:
    """The two values legitimately differ.

    Attributes
    ----------
    raw
        Source text of the expected and actual expressions, if known.
    result
        Fragments of the one-line diagnosis, joined with spaces when rendered.
    message
        Additional explanation (value disagreements, ordering hints).
    expected_message
        What is present in actual but missing from expected.
    actual_message
        What is present in expected but missing from actual.
    """

    raw: Raw
    result: tuple[Any, ...]
    message: str | None = None
    expected_message: str | None = None
    actual_message: str | None = None

    @property
    def result_text(self) -> str:
        return " ".join(str(part) for part in self.result)


@dataclass(frozen=True)
class Error:
    """An exception was raised while evaluating one side of the expectation."""

    raw: Raw
    result: BaseException
    stack_trace: str = ""
    expected_message: str | None = None
    actual_message: str | None = None

    @property
    def threw(self) -> str:
        return f"{type(self.result).__name__}-{self.result}"


ComparisonResult = Union[Pass, Fail, Error]


class Summary(BaseModel):
    """Totals for a finished run."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    test: int = 0
    pass_: int = Field(default=0, alias="pass")
    fail: int = 0
    error: int = 0

    @computed_field  # type: ignore[prop-decorator]
    @property
    def assertions(self) -> int:
        return self.pass_ + self.fail + self.error

    @computed_field  # type: ignore[prop-decorator]
    @property
    def ok(self) -> bool:
        return self.fail + self.error == 0
