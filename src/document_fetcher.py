"""
Document Fetcher
Single-shot async GET of an upstream receipt via aiohttp.

The CBE receipt server presents a certificate chain that does not verify, so
certificate checks are switched off for that one request (ssl=False on the
call itself). Telebirr requests keep the default verification.
"""

import asyncio
from typing import Callable, Optional

import aiohttp
from loguru import logger

from errors import FetchError
from payment_record import ReceiptDocument, SourceNetwork


class DocumentFetcher:
    """
    Fetch a receipt document for one lookup.

    No retries, no caching: one request per call, failure raises FetchError.
    """

    def __init__(
        self,
        timeout_seconds: Optional[float] = None,
        session_factory: Callable[..., aiohttp.ClientSession] = aiohttp.ClientSession,
    ):
        self.timeout_seconds = timeout_seconds
        self.session_factory = session_factory

    async def fetch(self, link: str, network: SourceNetwork) -> ReceiptDocument:
        """
        GET the receipt at ``link``.

        CBE bodies are read as raw bytes (PDF), Telebirr bodies as text (HTML).
        """
        # Only the CBE call relaxes TLS verification.
        ssl = network is not SourceNetwork.CBE
        session_kwargs = {}
        if self.timeout_seconds is not None:
            session_kwargs['timeout'] = aiohttp.ClientTimeout(total=self.timeout_seconds)

        logger.info(f"[DocumentFetcher] GET {link} ({network.value})")
        try:
            async with self.session_factory(**session_kwargs) as session:
                async with session.get(link, ssl=ssl) as response:
                    response.raise_for_status()
                    if network is SourceNetwork.CBE:
                        content = await response.read()
                    else:
                        content = await response.text(errors="replace")
        except aiohttp.ClientResponseError as e:
            raise FetchError(f"Request failed with status code {e.status}") from e
        except asyncio.TimeoutError as e:
            raise FetchError(f"Request to {link} timed out") from e
        except aiohttp.ClientError as e:
            raise FetchError(str(e) or e.__class__.__name__) from e

        logger.debug(f"[DocumentFetcher] {len(content)} {'bytes' if isinstance(content, bytes) else 'chars'} from {link}")
        return ReceiptDocument(network=network, link=link, content=content)
