"""
Source retrieval for URL imports.

One GET per import with a browser User-Agent (many recipe sites block
default client agents) and redirects followed. The final URL after
redirects becomes the document base for resolving relative links.
"""

import logging
from typing import Optional

import httpx

from ..config.settings import settings
from ..exceptions import SourceUnavailableError
from ..models import MarkupDocument

logger = logging.getLogger(__name__)


def _headers() -> dict:
    return {
        "User-Agent": settings.fetch_user_agent,
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        "Accept-Language": "en-US,en;q=0.9",
    }


async def fetch_document(
    url: str,
    client: Optional[httpx.AsyncClient] = None,
    timeout: Optional[float] = None,
) -> MarkupDocument:
    """
    Fetch a recipe page.

    Args:
        url: Page URL
        client: Optional shared AsyncClient (a temporary one is created otherwise)
        timeout: Request timeout in seconds (defaults to settings.fetch_timeout)

    Returns:
        MarkupDocument with the page HTML and its resolved URL

    Raises:
        SourceUnavailableError: transport failure or non-2xx response
    """
    timeout = timeout or settings.fetch_timeout

    try:
        if client is None:
            async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as temp_client:
                response = await temp_client.get(url, headers=_headers())
        else:
            response = await client.get(url, headers=_headers(), follow_redirects=True, timeout=timeout)
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        logger.warning(f"Fetch failed for {url}: HTTP {e.response.status_code}")
        raise SourceUnavailableError(url, f"HTTP {e.response.status_code}") from e
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        logger.warning(f"Fetch failed for {url}: {e!r}")
        raise SourceUnavailableError(url, str(e) or type(e).__name__) from e

    logger.info(f"Fetched {len(response.text):,} chars from {response.url}")
    return MarkupDocument(markup=response.text, base_url=str(response.url))
