"""
Queue delivery envelope.

A receive from a storage queue hands back the decoded payload together with
the AckToken needed to delete that one delivery. The token is only valid
until the visibility timeout expires; after that the message may be handed
to another receiver with a new pop receipt.

Exports:
    AckToken: (message_id, pop_receipt) pair
    QueueEnvelope: Payload plus delivery bookkeeping
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class AckToken:
    message_id: str
    pop_receipt: str

    def to_dict(self) -> Dict[str, str]:
        return {"messageId": self.message_id, "popReceipt": self.pop_receipt}


@dataclass(frozen=True)
class QueueEnvelope(Generic[T]):
    payload: T
    ack_token: AckToken
    dequeue_count: int = 1
    inserted_on: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        payload = self.payload
        if hasattr(payload, "model_dump"):
            payload = payload.model_dump(mode="json", by_alias=True)
        return {
            "payload": payload,
            "ackToken": self.ack_token.to_dict(),
            "dequeueCount": self.dequeue_count,
            "insertedOn": self.inserted_on.isoformat() if self.inserted_on else None,
        }
