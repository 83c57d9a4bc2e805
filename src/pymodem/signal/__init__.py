"""Extended signal reporting: interface object, refresh scheduler and lifecycle."""

from pymodem.signal.interface import SignalInterface
from pymodem.signal.lifecycle import Authorizer, LifecycleState, SignalLifecycle
from pymodem.signal.scheduler import RecurringTimer, RefreshContext, RefreshScheduler

__all__ = [
    "Authorizer",
    "LifecycleState",
    "RecurringTimer",
    "RefreshContext",
    "RefreshScheduler",
    "SignalInterface",
    "SignalLifecycle",
]
