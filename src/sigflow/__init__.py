"""sigflow: fine-grained reactive signals, effects and computed values for Python."""

from importlib.metadata import version as _version

__version__ = _version("sigflow")

from sigflow._runtime import Runtime, get_pending_count, use_runtime
from sigflow.signals import Kind, Signal, signal, is_signal, is_computed
from sigflow.effects import Effect, effect, on, untrack
from sigflow.computed import Computed, computed
from sigflow.action import action, batch, transaction
from sigflow.scope import root
from sigflow.store import Store, store
from sigflow.cache import memo
# debug and textual NOT auto-imported — opt-in only

__all__ = [
    "Signal",
    "Kind",
    "signal",
    "is_signal",
    "is_computed",
    "Effect",
    "effect",
    "on",
    "untrack",
    "Computed",
    "computed",
    "batch",
    "action",
    "transaction",
    "root",
    "Store",
    "store",
    "memo",
    "Runtime",
    "use_runtime",
    "get_pending_count",
]
