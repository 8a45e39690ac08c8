"""
Extractor Factory
=================
Routes to the correct extractor strategy based on the source network.

Usage
-----
    factory   = ExtractorFactory()
    extractor = factory.get_extractor(SourceNetwork.CBE)
    record    = extractor.extract(document, transaction_id, link)
"""

from loguru import logger

from extractor.base_extractor import BaseExtractor
from extractor.cbe_extractor import CBEReceiptExtractor
from extractor.telebirr_extractor import TelebirrReceiptExtractor
from payment_record import SourceNetwork


class ExtractorFactory:
    """
    Returns the extractor for a given source network.

    Each network has a fixed output schema, so there is no generic fallback:
    an unsupported network is an error.
    """

    # ── Mapping: network → extractor class ────────────────────────────────────
    _CLASSES = {
        SourceNetwork.CBE:      CBEReceiptExtractor,
        SourceNetwork.TELEBIRR: TelebirrReceiptExtractor,
    }

    def __init__(self):
        self._extractors: dict[SourceNetwork, BaseExtractor] = {}   # lazy-initialized

    def get_extractor(self, network: SourceNetwork) -> BaseExtractor:
        """
        Return a (cached) extractor instance for the given network.

        Parameters
        ----------
        network : SourceNetwork
            SourceNetwork.CBE or SourceNetwork.TELEBIRR

        Returns
        -------
        BaseExtractor subclass instance
        """
        if network not in self._CLASSES:
            raise ValueError(f"Unsupported source network: {network!r}")

        if network not in self._extractors:
            cls = self._CLASSES[network]
            self._extractors[network] = cls()
            logger.debug(f"[ExtractorFactory] Initialised {cls.__name__}")

        return self._extractors[network]

    @property
    def supported_networks(self) -> list:
        """List of all supported source networks."""
        return list(self._CLASSES.keys())
