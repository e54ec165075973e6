"""Reporter interface."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from expectations.results import ComparisonResult, Summary
    from expectations.testing.case import TestCase


class Reporter:
    """Receives run events synchronously, in order.

    For every case: ``started``, one ``reported`` with its comparison result,
    then ``finished``. After all cases, ``reported`` once more with the
    :class:`~expectations.results.Summary` and ``case=None``.
    """

    def started(self, case: TestCase) -> None:
        pass

    def finished(self, case: TestCase) -> None:
        pass

    def reported(self, record: ComparisonResult | Summary, case: TestCase | None) -> None:
        pass
