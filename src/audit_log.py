"""
Audit Log
SQLite sink for successful lookups. Append-only.

One row per resolved transaction: the ID, the receipt link, the JSON
record that was returned, and who asked (IP, user agent, EAT timestamp).
"""

import json
import sqlite3
import threading
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional

from loguru import logger

from payment_record import PaymentRecord


# Ethiopia: UTC+3, no DST
EAT = timezone(timedelta(hours=3), name="EAT")

_CREATE_TABLE = """
    CREATE TABLE IF NOT EXISTS logs (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        transactionId TEXT,
        link TEXT,
        response TEXT,
        ip TEXT,
        userAgent TEXT,
        timestamp TEXT
    )
"""

_INSERT = """
    INSERT INTO logs (transactionId, link, response, ip, userAgent, timestamp)
    VALUES (?, ?, ?, ?, ?, ?)
"""


class AuditLogger:
    """
    Append-only log of resolved transactions.

    A single connection is shared across requests; the lock makes each
    append one whole row committed in its own transaction.
    """

    def __init__(self, db_path: str = "./db.db"):
        self.db_path = db_path
        self._lock = threading.Lock()
        self._conn = sqlite3.connect(db_path, check_same_thread=False)
        with self._lock, self._conn:
            self._conn.execute(_CREATE_TABLE)
        logger.info(f"[AuditLogger] Using {db_path}")

    def append(
        self,
        transaction_id: str,
        link: str,
        record: PaymentRecord,
        ip: str,
        user_agent: str,
    ) -> bool:
        """
        Store one resolved lookup. Returns False if the write failed;
        a failed write never fails the lookup itself.
        """
        row = (
            transaction_id,
            link,
            json.dumps(record.to_response(), ensure_ascii=False),
            ip,
            user_agent,
            datetime.now(EAT).isoformat(timespec="milliseconds"),
        )
        try:
            with self._lock, self._conn:
                self._conn.execute(_INSERT, row)
        except sqlite3.Error as e:
            logger.error(f"[AuditLogger] Failed to log {transaction_id!r}: {e}")
            return False

        logger.debug(f"[AuditLogger] Logged {transaction_id!r} from {ip}")
        return True

    def entries(self, transaction_id: Optional[str] = None) -> List[Dict]:
        """All logged rows (oldest first), optionally for one transaction ID."""
        query = "SELECT id, transactionId, link, response, ip, userAgent, timestamp FROM logs"
        params = ()
        if transaction_id is not None:
            query += " WHERE transactionId = ?"
            params = (transaction_id,)
        query += " ORDER BY id"

        with self._lock:
            cursor = self._conn.execute(query, params)
            columns = [c[0] for c in cursor.description]
            return [dict(zip(columns, r)) for r in cursor.fetchall()]

    def close(self):
        with self._lock:
            self._conn.close()
