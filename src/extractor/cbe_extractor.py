"""
CBE Receipt Extractor
=====================
Commercial Bank of Ethiopia transfer receipts are PDFs with a fixed
label → value → next-label layout and no machine-readable delimiters.

The PDF text is flattened onto one line and each field is read as the
text between its own label and a terminator (usually the next label):

  Payer <payer> Account <payerAccount> Receiver <receiver>
  Account <1****dddd> Payment Date & Time <paymentDateTime>
  Reference No. (VAT Invoice No) <referenceNo> Reason / Type of service
  <reason> Transferred Amount … Total amount debited from customers account
  <totalAmount> Amount in Word …

Matching is case-insensitive and takes the FIRST occurrence, so the table
order and the terminators matter. Layout drift upstream breaks it silently.
"""

import io
import re
from dataclasses import dataclass
from typing import Dict, Optional

import pdfplumber
from loguru import logger

from errors import ParseError
from extractor.base_extractor import BaseExtractor
from payment_record import SourceNetwork
from utils import flatten_whitespace


@dataclass(frozen=True)
class AnchorField:
    """One field: text between ``label`` and ``terminator`` (both regexes)."""
    name: str
    label: str
    terminator: str
    value: str = r'.*?'

    @property
    def pattern(self) -> re.Pattern:
        return re.compile(
            rf'{self.label}\s*({self.value})\s*{self.terminator}', re.IGNORECASE
        )


# ─── Field table (document order) ─────────────────────────────────────────────

CBE_FIELDS = (
    AnchorField("payer",           r'Payer',                             r'Account'),
    AnchorField("payerAccount",    r'Account',                           r'Receiver'),
    AnchorField("receiver",        r'Receiver',                          r'Account'),
    # Label carries the masked account; the value may not span another "Account".
    AnchorField("receiverAccount", r'Account 1\*{4}\d{4}',               r'Payment Date & Time',
                value=r'(?:(?!Account).)*?'),
    AnchorField("paymentDateTime", r'Payment Date & Time',               r'Reference No'),
    AnchorField("referenceNo",     r'Reference No\. \(VAT Invoice No\)', r'Reason'),
    AnchorField("reason",          r'Reason / Type of service',          r'Transferred Amount'),
    AnchorField("totalAmount",     r'Total amount debited from customers account', r'Amount in Word'),
)

# TODO: confirm with CBE operations whether this account should stay the
# receiverAccount default or be reported as missing.
DEFAULT_RECEIVER_ACCOUNT = "1000009338067"


class CBEReceiptExtractor(BaseExtractor):
    """Anchor-pair scanning over the flattened PDF text."""

    NETWORK = SourceNetwork.CBE
    FIELDS = CBE_FIELDS
    FALLBACKS = {
        "payerAccount":    "Unknown",
        "receiverAccount": DEFAULT_RECEIVER_ACCOUNT,
        "totalAmount":     "Unknown",
    }
    UNITS = {"totalAmount": " ETB"}
    MISSING = None

    def __init__(self):
        self._patterns = [(f.name, f.pattern) for f in self.FIELDS]

    def _decode(self, content: bytes) -> str:
        """PDF bytes → one flat line of text."""
        try:
            with pdfplumber.open(io.BytesIO(content)) as pdf:
                pages = [page.extract_text() or "" for page in pdf.pages]
        except Exception as e:
            logger.error(f"[CBEReceiptExtractor] PDF decode failed: {e}")
            raise ParseError(f"Could not read CBE receipt PDF: {e}") from e

        return flatten_whitespace(" ".join(pages))

    def _fields(self, text: str) -> Dict[str, Optional[str]]:
        return {name: self.scan(text, pattern) for name, pattern in self._patterns}

    @staticmethod
    def scan(text: str, pattern: re.Pattern) -> Optional[str]:
        """First match of an anchor pattern, stripped; None if absent."""
        m = pattern.search(text)
        return m.group(1).strip() if m else None
