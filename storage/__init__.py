from .batch_submitter import InsertFn, InsertOutcome, SubmissionResult, partition, submit_in_batches
from .json_store import DeliveryStoreError, JsonDeliveryStore

__all__ = [
    "DeliveryStoreError",
    "InsertFn",
    "InsertOutcome",
    "JsonDeliveryStore",
    "SubmissionResult",
    "partition",
    "submit_in_batches",
]
