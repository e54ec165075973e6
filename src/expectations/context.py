"""Explicit execution context passed from the runner down to the aggregator."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING
from uuid import UUID, uuid4

from expectations.config import ExpectationsSettings

if TYPE_CHECKING:
    from expectations.testing.aggregator import Aggregator, Counters
    from expectations.testing.case import SourceMeta, TestCase


class CaseState(Enum):
    """Lifecycle of a single test case within a run. Never re-entered."""

    PENDING = "pending"
    STARTED = "started"
    RUNNING = "running"
    COMPARED = "compared"
    FINISHED = "finished"


@dataclass(frozen=True, slots=True)
class RunContext:
    """State shared by every case of one run.

    Attributes
    ----------
    aggregator
        Counts results and forwards them to reporters.
    settings
        Settings the run was started with.
    run_id
        Identifier of this run.
    """

    aggregator: Aggregator
    settings: ExpectationsSettings = field(default_factory=ExpectationsSettings)
    run_id: UUID = field(default_factory=uuid4)

    @property
    def counters(self) -> Counters:
        return self.aggregator.counters


@dataclass(slots=True)
class CaseContext:
    """The case currently being executed and where it is in its lifecycle."""

    case: TestCase
    state: CaseState = CaseState.PENDING

    @property
    def name(self) -> str:
        return self.case.name

    @property
    def meta(self) -> SourceMeta:
        return self.case.meta

    def advance(self, state: CaseState) -> None:
        order = list(CaseState)
        if order.index(state) <= order.index(self.state):
            msg = f"{self.name}: cannot move from {self.state.value} to {state.value}"
            raise RuntimeError(msg)
        self.state = state
