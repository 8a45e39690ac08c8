"""
Transaction Router
==================
Picks the issuing network from the shape of the transaction ID and builds
the receipt URL, BEFORE anything is fetched.

  'FT…'        CBE        PDF receipt, ID + fixed suffix in the query string
  anything     Telebirr   HTML receipt, ID interpolated into the path

No other validation happens here; a malformed ID fails at fetch time.
"""

from typing import Dict, Optional, Tuple

from loguru import logger

from payment_record import SourceNetwork
from utils import default_config


CBE_PREFIX = "FT"


class TransactionRouter:

    def __init__(self, sources: Optional[Dict] = None):
        sources = sources or default_config()['sources']
        self.cbe_template = sources['cbe']['url_template']
        self.cbe_suffix = sources['cbe']['id_suffix']
        self.telebirr_template = sources['telebirr']['url_template']

    def route(self, transaction_id: str) -> Tuple[SourceNetwork, str]:
        """
        Return (network, link) for a transaction ID.

        Raises
        ------
        ValueError
            If the ID is empty.
        """
        if not transaction_id:
            raise ValueError("Transaction ID is required")

        if transaction_id.startswith(CBE_PREFIX):
            network = SourceNetwork.CBE
            link = self.cbe_template.format(
                transaction_id=transaction_id, suffix=self.cbe_suffix
            )
        else:
            network = SourceNetwork.TELEBIRR
            link = self.telebirr_template.format(transaction_id=transaction_id)

        logger.debug(f"[TransactionRouter] {transaction_id!r} → {network.value} ({link})")
        return network, link
