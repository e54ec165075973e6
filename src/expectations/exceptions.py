"""Exceptions raised to the caller when the library is misused.

Failures of the code under test are never raised; they become
:class:`~expectations.results.Fail` or :class:`~expectations.results.Error`
records.
"""


class ExpectationsError(Exception):
    """Base class for library usage errors."""


class DeclarationError(ExpectationsError, ValueError):
    """An expectation or ``given`` template was declared with bad arguments."""


class DiscoveryError(ExpectationsError, ImportError):
    """A test module could not be located or loaded."""
