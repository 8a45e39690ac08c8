"""
Base Extractor
==============
Contains ALL shared extraction logic:
  - decode the fetched document (subclass)
  - pull raw field values out of it (subclass)
  - normalise: fallbacks, unit suffixes, fixed key order
  - assemble the PaymentRecord

Subclasses override ONLY _decode() and _fields(), and declare their
per-field policy as class-level tables:

  FALLBACKS  field → value used when the field is missing or empty
  UNITS      field → suffix appended to a present value
  MISSING    value for any other missing field (None for CBE, "" for Telebirr)
"""

from typing import Any, Dict, Optional

from loguru import logger

from payment_record import RECORD_FIELDS, PaymentRecord, ReceiptDocument, SourceNetwork


class BaseExtractor:
    """
    Abstract base class.  Subclasses implement _decode() and _fields().

    Call extract(document, transaction_id, link) → PaymentRecord.
    """

    NETWORK: SourceNetwork = None
    FALLBACKS: Dict[str, str] = {}
    UNITS: Dict[str, str] = {}
    MISSING: Optional[str] = None

    # ── Public entry point ────────────────────────────────────────────────────

    def extract(self, document: ReceiptDocument, transaction_id: str, link: str) -> PaymentRecord:
        """
        Extract a fully keyed payment record from a fetched receipt.

        Raises
        ------
        ParseError
            The document cannot be decoded.
        InvalidIdentifierError
            The document itself says the transaction ID is unknown.
        """
        data = self.parse(self._decode(document.content))
        logger.info(f"[{self.__class__.__name__}] tx={transaction_id!r} extracted")
        return PaymentRecord(
            source=self.NETWORK,
            transaction_id=transaction_id,
            link=link,
            data=data,
        )

    def parse(self, decoded: Any) -> Dict[str, Optional[str]]:
        """Decoded document → normalised field map (schema keys, schema order)."""
        raw = self._fields(decoded)
        found = sum(1 for name in RECORD_FIELDS[self.NETWORK] if raw.get(name))
        logger.debug(
            f"[{self.__class__.__name__}] fields found={found}/{len(RECORD_FIELDS[self.NETWORK])} "
            f"missing={[n for n in RECORD_FIELDS[self.NETWORK] if not raw.get(n)]}"
        )
        return self._normalize(raw)

    # ── Must be overridden ────────────────────────────────────────────────────

    def _decode(self, content: Any) -> Any:
        """Turn raw bytes/text into something _fields() can scan."""
        raise NotImplementedError(
            f"{self.__class__.__name__} must implement _decode()"
        )

    def _fields(self, decoded: Any) -> Dict[str, Optional[str]]:
        """Return raw values keyed by field name; absent → None or missing key."""
        raise NotImplementedError(
            f"{self.__class__.__name__} must implement _fields()"
        )

    # ── Shared helpers ────────────────────────────────────────────────────────

    def _normalize(self, raw: Dict[str, Optional[str]]) -> Dict[str, Optional[str]]:
        """Every schema key, in schema order; empty values degrade to fallbacks."""
        data = {}
        for name in RECORD_FIELDS[self.NETWORK]:
            value = raw.get(name)
            if value:
                data[name] = f"{value}{self.UNITS.get(name, '')}"
            else:
                data[name] = self.FALLBACKS.get(name, self.MISSING)
        return data
