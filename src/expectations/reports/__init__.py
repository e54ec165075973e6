from .base import Reporter
from .console import ConsoleReporter

__all__ = [
    "ConsoleReporter",
    "Reporter",
]
