# toli/components/ai/transport.py
"""
HTTP transport used by the model backends.

One POST per call, JSON in and JSON out. Connection problems and non-2xx
statuses become ``TransportError``; a body that is not a JSON object becomes
``FormatError`` carrying the raw text.
"""
import json
from typing import Any, Dict, Optional

import aiohttp

from toli.constants import REQUEST_TIMEOUT
from toli.components.ai.errors import FormatError, TransportError
from toli.utils.logging import get_logger

logger = get_logger(__name__)


class HttpTransport:
    """A lazily opened ``aiohttp`` session owned by exactly one backend."""

    def __init__(self, timeout: float = REQUEST_TIMEOUT, headers: Optional[Dict[str, str]] = None):
        self._timeout = aiohttp.ClientTimeout(total=timeout)
        self._headers = dict(headers or {})
        self._session: Optional[aiohttp.ClientSession] = None

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self._timeout, headers=self._headers)
        return self._session

    async def post_json(self, url: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        POST ``payload`` as JSON and return the decoded response object.

        Raises:
            TransportError: On connection failure, timeout or non-2xx status.
            FormatError: If the body is not a JSON object.
        """
        session = self._get_session()
        logger.debug(f"POST {url} (model={payload.get('model')})")

        try:
            async with session.post(url, json=payload) as response:
                body = await response.text()
                if response.status >= 400:
                    logger.error(f"Request to {url} failed with status {response.status}")
                    raise TransportError(
                        f"API request failed with status {response.status}: {body[:200]}",
                        status=response.status,
                    )
        except aiohttp.ClientError as e:
            logger.error(f"Failed to send request to {url}: {e}")
            raise TransportError(f"Failed to send request to {url}: {e}") from e
        except TimeoutError as e:
            logger.error(f"Request to {url} timed out")
            raise TransportError(f"Request to {url} timed out") from e

        try:
            data = json.loads(body)
        except json.JSONDecodeError as e:
            raise FormatError(f"Response body is not valid JSON: {e}", raw=body) from e

        if not isinstance(data, dict):
            raise FormatError("Response body is not a JSON object", raw=body)
        return data

    async def close(self) -> None:
        if self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None
