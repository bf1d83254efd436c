from __future__ import annotations

import logging
from typing import Any

import httpx

from ..config.loader import EndpointConfig
from .errors import SendError

"""Order upload: one multipart POST of the batch CSV.

Wire contract:
- POST <endpoint.url>
- multipart field "file" = CSV (text/csv, filename Order_<YYYY-MM-DD>.csv)
- no other fields, no auth headers

httpx never raises on HTTP status by itself; the status code is checked here.
200 -> the response body is returned verbatim. Anything else -> SendError with
the status code; the body only goes to the log. Transport failures (DNS,
connection refused, timeout) -> SendError chained to the httpx exception.
No retry.
"""

__all__ = [
    "CSV_MIME_TYPE",
    "FILE_FIELD",
    "send_batch",
]

logger = logging.getLogger(__name__)

CSV_MIME_TYPE = "text/csv"
FILE_FIELD = "file"


def _client_kwargs(endpoint: EndpointConfig) -> dict[str, Any]:
    # timeout 未指定なら httpx の既定値 (timeout=None は無制限になるので渡さない)
    if endpoint.timeout_seconds is None:
        return {}
    return {"timeout": endpoint.timeout_seconds}


def send_batch(
    csv_text: str,
    endpoint: EndpointConfig,
    file_name: str,
    client: httpx.Client | None = None,
) -> str:
    files = {FILE_FIELD: (file_name, csv_text.encode("utf-8"), CSV_MIME_TYPE)}
    owns_client = client is None
    if client is None:
        client = httpx.Client(**_client_kwargs(endpoint))
    try:
        logger.debug("send: POST %s (%s, %d bytes)", endpoint.url, file_name, len(csv_text))
        response = client.post(endpoint.url, files=files)
    except httpx.HTTPError as e:
        raise SendError(f"upload to {endpoint.url} failed: {e}") from e
    finally:
        if owns_client:
            client.close()

    if response.status_code != 200:
        logger.warning(
            "send: server replied %d, body=%r", response.status_code, response.text[:500]
        )
        raise SendError(
            f"server replied with status {response.status_code}",
            status_code=response.status_code,
        )
    return response.text
