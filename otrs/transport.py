# otrs/transport.py

import logging
from typing import Optional

import httpx

from otrs.errors import TransportError
from otrs.settings import OtrsConfig

logger = logging.getLogger(__name__)

CONTENT_TYPE = "application/soap+xml; charset=utf-8"


def build_endpoint(host_name: str, config: OtrsConfig) -> str:
    return f"{config.scheme}{host_name}{config.connector_path}"


def soap_headers(action: str, config: OtrsConfig) -> dict:
    # The "#" separator is what the connector is configured with on the server side
    return {
        "SOAPAction": f"{config.namespace}#{action}",
        "Content-Type": CONTENT_TYPE,
    }


async def send(url: str, action: str, envelope: bytes, config: OtrsConfig,
               transport: Optional[httpx.AsyncBaseTransport] = None) -> bytes:
    """
    POSTs one envelope and returns the raw response body. It stays bytes so
    the XML declaration, not the HTTP charset, decides how it is decoded.

    Every call gets its own AsyncClient, so nothing is pooled between
    operations. trust_env=False keeps HTTP(S)_PROXY out of the picture.
    httpx never sends "Expect: 100-continue"; headers and body go out together.
    """
    logger.debug("POST %s (%s, %d bytes)", url, action, len(envelope))
    async with httpx.AsyncClient(transport=transport, trust_env=False,
                                 timeout=config.timeout) as client:
        try:
            resp = await client.post(url, content=envelope,
                                     headers=soap_headers(action, config))
            resp.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.error("%s returned HTTP %s", url, exc.response.status_code)
            raise TransportError(url, f"HTTP {exc.response.status_code}",
                                 status_code=exc.response.status_code) from exc
        except httpx.HTTPError as exc:
            logger.error("%s request to %s failed: %s", action, url, exc)
            raise TransportError(url, str(exc) or type(exc).__name__) from exc
        return resp.content
