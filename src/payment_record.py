"""
Payment Record Models
=====================
The canonical output of a lookup and the document it is built from.

  SourceNetwork    which payment network issued the transaction
  RECORD_FIELDS    the fixed field schema of each network, in output order
  ReceiptDocument  fetched PDF bytes / HTML text, alive for one lookup only
  PaymentRecord    {source, transactionId, link, data} — serialised as-is
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator


class SourceNetwork(str, Enum):
    CBE = "CBE"
    TELEBIRR = "Telebirr"


# ─── Field schema per network ─────────────────────────────────────────────────

RECORD_FIELDS: Dict[SourceNetwork, tuple] = {
    SourceNetwork.CBE: (
        "payer",
        "payerAccount",
        "receiver",
        "receiverAccount",
        "paymentDateTime",
        "referenceNo",
        "reason",
        "totalAmount",
    ),
    SourceNetwork.TELEBIRR: (
        "paymentType",
        "payerName",
        "payerTelebirrNumber",
        "creditedPartyName",
        "bankAccountNumber",
        "receiptNumber",
        "paymentDate",
        "totalAmountPaid",
    ),
}


@dataclass(frozen=True)
class ReceiptDocument:
    """Raw upstream content: PDF bytes for CBE, HTML text for Telebirr."""
    network: SourceNetwork
    link: str
    content: Union[bytes, str]


class PaymentRecord(BaseModel):
    """Normalized payment record for one resolved transaction."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    source: SourceNetwork          = Field(...,  description="Issuing payment network")
    transaction_id: str            = Field(...,  alias="transactionId", description="Caller-supplied transaction ID")
    link: str                      = Field(...,  description="URL the receipt was fetched from")
    data: Dict[str, Optional[str]] = Field(...,  description="Extracted fields, fully keyed per source schema")

    @model_validator(mode="after")
    def _check_schema(self):
        expected = RECORD_FIELDS[self.source]
        if set(self.data) != set(expected):
            missing = [k for k in expected if k not in self.data]
            extra = [k for k in self.data if k not in expected]
            raise ValueError(
                f"{self.source.value} record keys mismatch: missing={missing} extra={extra}"
            )
        return self

    def to_response(self) -> Dict:
        """JSON-ready dict using the wire field names."""
        return self.model_dump(mode="json", by_alias=True)
