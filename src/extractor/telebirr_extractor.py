"""
Telebirr Receipt Extractor
==========================
Telebirr receipts are HTML pages built from label/value tables. Labels are
bilingual (Amharic/English) and each value sits in the cell right after
its label, so most fields are found by label text alone, in any order.

Receipt number and payment date are the exception: they live under a
header row of `receipttableTd2` cells and are read by column from the row
below it.

An unknown transaction ID returns a page saying "This request is not
correct" instead of a receipt; that is the only case treated as an error.
"""

from dataclasses import dataclass
from typing import Dict, Optional

from bs4 import BeautifulSoup
from loguru import logger

from errors import InvalidIdentifierError, ParseError
from extractor.base_extractor import BaseExtractor
from payment_record import SourceNetwork
from utils import flatten_whitespace


INVALID_ID_SENTINEL = "This request is not correct"


@dataclass(frozen=True)
class LabelField:
    """Value = text of the ``offset``-th <td> after the cell holding ``label``."""
    name: str
    label: str
    offset: int = 1


@dataclass(frozen=True)
class MarkerField:
    """Value = cell ``column`` of the row below the first ``marker_class`` cell."""
    name: str
    marker_class: str
    column: int


# ─── Field tables ─────────────────────────────────────────────────────────────

TELEBIRR_LABEL_FIELDS = (
    LabelField("payerName",           "የከፋይ ስም/Payer Name"),
    LabelField("payerTelebirrNumber", "የከፋይ ቴሌብር ቁ./Payer telebirr no."),
    LabelField("creditedPartyName",   "የገንዘብ ተቀባይ ስም/Credited Party name"),
    LabelField("paymentType",         "የክፍያ ምክንያት/Payment Reason"),
    LabelField("bankAccountNumber",   "የባንክ አካውንት ቁጥር/Bank account number"),
    LabelField("totalAmountPaid",     "ጠቅላላ የተከፈለ/Total Paid Amount"),
)

TELEBIRR_MARKER_FIELDS = (
    MarkerField("receiptNumber", "receipttableTd2", column=0),
    MarkerField("paymentDate",   "receipttableTd2", column=1),
)


def _cell_text(cell) -> str:
    return flatten_whitespace(cell.get_text()) if cell is not None else ""


def find_cell_by_label(soup: BeautifulSoup, label: str, offset: int = 1) -> str:
    """
    Text of the ``offset``-th sibling cell after the innermost <td>
    containing ``label``; "" when the label or the sibling is missing.
    """
    for td in soup.find_all("td"):
        if label not in _cell_text(td):
            continue
        # Layout tables nest: skip outer cells that merely wrap the label cell.
        if any(label in _cell_text(inner) for inner in td.find_all("td")):
            continue
        siblings = td.find_next_siblings("td")
        return _cell_text(siblings[offset - 1]) if len(siblings) >= offset else ""
    return ""


def find_cell_below_marker(soup: BeautifulSoup, marker_class: str, column: int) -> str:
    """
    Text of cell ``column`` in the row after the row holding the first
    ``marker_class`` cell; "" when the layout is not there.
    """
    marker = soup.find("td", class_=marker_class)
    if marker is None:
        return ""
    # Each header cell must exist for its column to be read.
    if column > 0 and len(marker.find_next_siblings("td")) < column:
        return ""
    row = marker.find_parent("tr")
    next_row = row.find_next_sibling("tr") if row is not None else None
    if next_row is None:
        return ""
    cells = next_row.find_all("td")
    return _cell_text(cells[column]) if len(cells) > column else ""


class TelebirrReceiptExtractor(BaseExtractor):
    """Label-adjacency lookup over the parsed receipt page."""

    NETWORK = SourceNetwork.TELEBIRR
    LABEL_FIELDS = TELEBIRR_LABEL_FIELDS
    MARKER_FIELDS = TELEBIRR_MARKER_FIELDS
    FALLBACKS = {"bankAccountNumber": "Not available"}
    MISSING = ""

    def _decode(self, content: str) -> BeautifulSoup:
        if isinstance(content, bytes):
            content = content.decode("utf-8", errors="replace")

        if INVALID_ID_SENTINEL in content:
            logger.warning("[TelebirrReceiptExtractor] upstream rejected transaction ID")
            raise InvalidIdentifierError("Invalid Telebirr transaction ID")

        try:
            return BeautifulSoup(content, "html.parser")
        except Exception as e:
            logger.error(f"[TelebirrReceiptExtractor] HTML parse failed: {e}")
            raise ParseError(f"Could not parse Telebirr receipt HTML: {e}") from e

    def _fields(self, soup: BeautifulSoup) -> Dict[str, Optional[str]]:
        fields = {
            f.name: find_cell_by_label(soup, f.label, f.offset)
            for f in self.LABEL_FIELDS
        }
        for f in self.MARKER_FIELDS:
            fields[f.name] = find_cell_below_marker(soup, f.marker_class, f.column)
        return fields
