"""
Receipt Resolution Pipeline
Combines routing, fetching, extraction and audit logging into one lookup
"""

import asyncio
from typing import Dict, Optional

from loguru import logger

from audit_log import AuditLogger
from document_fetcher import DocumentFetcher
from extractor import ExtractorFactory
from payment_record import PaymentRecord
from transaction_router import TransactionRouter
from utils import load_config


class ReceiptResolver:
    """
    End-to-end transaction lookup

    Workflow:
    1. Route the transaction ID to its network and receipt URL
    2. Fetch the receipt
    3. Extract and normalise the fields
    4. Append the result to the audit log (success only, in a worker thread)

    Lookups share no mutable state apart from the audit log.
    """

    def __init__(
        self,
        router: TransactionRouter,
        fetcher: DocumentFetcher,
        extractors: ExtractorFactory,
        audit_log: Optional[AuditLogger] = None,
    ):
        self.router = router
        self.fetcher = fetcher
        self.extractors = extractors
        self.audit_log = audit_log

    @classmethod
    def from_config(cls, config: Optional[Dict] = None) -> "ReceiptResolver":
        """Build all components from a config dict (default: load_config())"""
        config = config or load_config()
        logger.info("Initializing Receipt Resolver")
        resolver = cls(
            router=TransactionRouter(config['sources']),
            fetcher=DocumentFetcher(timeout_seconds=config['fetch']['timeout_seconds']),
            extractors=ExtractorFactory(),
            audit_log=AuditLogger(config['storage']['db_path']),
        )
        logger.success("Receipt Resolver ready")
        return resolver

    async def resolve(
        self,
        transaction_id: str,
        caller_ip: str = "Unknown",
        user_agent: str = "Unknown",
    ) -> PaymentRecord:
        """
        Resolve a transaction ID into a payment record.

        Args:
            transaction_id: Caller-supplied ID ('FT…' → CBE, else Telebirr)
            caller_ip:      Recorded in the audit log
            user_agent:     Recorded in the audit log

        Returns:
            PaymentRecord

        Raises:
            FetchError, ParseError, InvalidIdentifierError — unchanged, and
            nothing is logged to the audit sink.
        """
        network, link = self.router.route(transaction_id)
        logger.info(f"Resolving {transaction_id} via {network.value}")

        document = await self.fetcher.fetch(link, network)

        extractor = self.extractors.get_extractor(network)
        record = extractor.extract(document, transaction_id, link)

        if self.audit_log is not None:
            await asyncio.to_thread(
                self.audit_log.append, transaction_id, link, record, caller_ip, user_agent
            )

        return record
