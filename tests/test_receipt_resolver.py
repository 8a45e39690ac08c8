"""
Tests for the end-to-end Receipt Resolver
"""

import asyncio
import json
import threading

import pytest
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from audit_log import AuditLogger
from document_fetcher import DocumentFetcher
from errors import FetchError, InvalidIdentifierError, ParseError
from extractor import ExtractorFactory
from payment_record import PaymentRecord, SourceNetwork
from receipt_resolver import ReceiptResolver
from transaction_router import TransactionRouter
from utils import default_config

from fakes import FakeResponse, FakeSession
from helpers import CBE_LINES, TELEBIRR_INVALID_HTML, make_pdf, make_telebirr_html


@pytest.fixture
def audit_log(tmp_path):
    log = AuditLogger(str(tmp_path / "audit.db"))
    yield log
    log.close()


def _resolver(session, audit_log):
    return ReceiptResolver(
        router=TransactionRouter(),
        fetcher=DocumentFetcher(session_factory=session),
        extractors=ExtractorFactory(),
        audit_log=audit_log,
    )


@pytest.mark.asyncio
async def test_resolve_cbe_and_log(audit_log):
    session = FakeSession(FakeResponse(body=make_pdf(CBE_LINES)))
    resolver = _resolver(session, audit_log)

    record = await resolver.resolve("FT25287ABC12", "196.188.1.1", "pytest-agent")

    assert record.source is SourceNetwork.CBE
    assert record.link == "https://apps.cbe.com.et:100/?id=FT25287ABC12W09338067"
    assert record.data["totalAmount"] == "1,505.75 ETB"
    assert session.calls[0][1] == {"ssl": False}

    entries = audit_log.entries()
    assert len(entries) == 1
    entry = entries[0]
    assert entry["transactionId"] == "FT25287ABC12"
    assert entry["link"] == record.link
    assert entry["ip"] == "196.188.1.1"
    assert entry["userAgent"] == "pytest-agent"
    assert json.loads(entry["response"]) == record.to_response()


@pytest.mark.asyncio
async def test_resolve_telebirr(audit_log):
    session = FakeSession(FakeResponse(body=make_telebirr_html()))
    resolver = _resolver(session, audit_log)

    record = await resolver.resolve("CJK1234XYZ")

    assert record.source is SourceNetwork.TELEBIRR
    assert record.data["receiptNumber"] == "CJK1234XYZ"
    assert audit_log.entries("CJK1234XYZ")[0]["ip"] == "Unknown"


@pytest.mark.asyncio
@pytest.mark.parametrize("transaction_id", ["FT25287ABC12", "CJK1234XYZ"])
async def test_fetch_failure_propagates_without_audit(audit_log, transaction_id):
    resolver = _resolver(FakeSession(FakeResponse(status=503)), audit_log)

    with pytest.raises(FetchError):
        await resolver.resolve(transaction_id, "1.2.3.4", "ua")

    assert audit_log.entries() == []


@pytest.mark.asyncio
async def test_invalid_telebirr_id_propagates_without_audit(audit_log):
    resolver = _resolver(FakeSession(FakeResponse(body=TELEBIRR_INVALID_HTML)), audit_log)

    with pytest.raises(InvalidIdentifierError):
        await resolver.resolve("BADID")

    assert audit_log.entries() == []


@pytest.mark.asyncio
async def test_corrupt_pdf_propagates_without_audit(audit_log):
    resolver = _resolver(FakeSession(FakeResponse(body=b"<html>not a pdf</html>")), audit_log)

    with pytest.raises(ParseError):
        await resolver.resolve("FT25287ABC12")

    assert audit_log.entries() == []


@pytest.mark.asyncio
async def test_concurrent_lookups_each_logged_once(audit_log):
    session = FakeSession(FakeResponse(body=make_telebirr_html()))
    resolver = _resolver(session, audit_log)
    ids = [f"TB{i:04d}" for i in range(20)]

    records = await asyncio.gather(*(resolver.resolve(i) for i in ids))

    assert [r.transaction_id for r in records] == ids
    logged = sorted(e["transactionId"] for e in audit_log.entries())
    assert logged == ids


class ThreadRecordingAuditLogger(AuditLogger):
    def __init__(self, db_path):
        super().__init__(db_path)
        self.threads = []

    def append(self, *args, **kwargs):
        self.threads.append(threading.get_ident())
        return super().append(*args, **kwargs)


@pytest.mark.asyncio
async def test_audit_append_runs_off_the_event_loop(tmp_path):
    audit_log = ThreadRecordingAuditLogger(str(tmp_path / "threads.db"))
    resolver = _resolver(FakeSession(FakeResponse(body=make_telebirr_html())), audit_log)

    await resolver.resolve("CJK1234XYZ")

    assert len(audit_log.threads) == 1
    assert audit_log.threads[0] != threading.get_ident()
    assert [e["transactionId"] for e in audit_log.entries()] == ["CJK1234XYZ"]
    audit_log.close()


@pytest.mark.asyncio
async def test_resolver_without_audit_log():
    resolver = _resolver(FakeSession(FakeResponse(body=make_telebirr_html())), None)

    record = await resolver.resolve("CJK1234XYZ")

    assert isinstance(record, PaymentRecord)


def test_from_config_builds_components(tmp_path):
    config = default_config()
    config['storage']['db_path'] = str(tmp_path / "resolver.db")
    config['fetch']['timeout_seconds'] = 20

    resolver = ReceiptResolver.from_config(config)

    assert resolver.fetcher.timeout_seconds == 20
    assert resolver.audit_log.db_path == str(tmp_path / "resolver.db")
    resolver.audit_log.close()
