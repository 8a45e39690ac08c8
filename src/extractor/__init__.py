"""
Extractor package — per-network field extractors for payment receipts.

Each extractor handles one upstream receipt format:
  CBE       PDF, anchor-pair scanning over the flattened text
  Telebirr  HTML, label-adjacency lookup in the receipt tables

Fallbacks, unit suffixes and key order live in BaseExtractor and are
driven by each subclass's tables.

Usage (via factory)
-------------------
from extractor import ExtractorFactory
factory = ExtractorFactory()
extractor = factory.get_extractor(SourceNetwork.TELEBIRR)
record    = extractor.extract(document, transaction_id, link)
"""

from extractor.factory import ExtractorFactory

__all__ = ["ExtractorFactory"]
