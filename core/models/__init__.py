from core.models.long_form import Acronym, LongForm
from core.models.network import (
    DataReceived,
    LookupOutcome,
    PendingRequest,
    ResponseReceived,
    TransferCompleted,
    TransferHandle,
)

__all__ = [
    "Acronym",
    "DataReceived",
    "LongForm",
    "LookupOutcome",
    "PendingRequest",
    "ResponseReceived",
    "TransferCompleted",
    "TransferHandle",
]
