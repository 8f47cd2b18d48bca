from collections.abc import Callable
from typing import Any, Literal

type Record = dict[str, Any]
type OutcomeStatus = Literal["succeeded", "failed", "ignored", "empty"]
type SearchParameter = Literal["sf", "lf"]
type CancelCallback = Callable[[], Any]

__all__ = [
    "CancelCallback",
    "OutcomeStatus",
    "Record",
    "SearchParameter",
]
