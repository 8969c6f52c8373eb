from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlparse

import httpx

from .config import FETCH_MAX_BYTES, FETCH_TIMEOUT_S, USER_AGENT
from .logging_utils import get_logger

log = get_logger(__name__)


class WebToolError(RuntimeError):
    pass


def _is_http_url(url: str) -> bool:
    try:
        u = urlparse(url)
    except ValueError:
        return False
    return u.scheme in ("http", "https") and bool(u.netloc)


async def _read_limited(resp: httpx.Response, max_bytes: int) -> tuple[bytes, bool]:
    if max_bytes <= 0:
        raise WebToolError("max_bytes must be > 0")
    buf = bytearray()
    truncated = False
    async for chunk in resp.aiter_bytes():
        if not chunk:
            continue
        remaining = max_bytes - len(buf)
        if remaining <= 0:
            truncated = True
            break
        if len(chunk) > remaining:
            buf.extend(chunk[:remaining])
            truncated = True
            break
        buf.extend(chunk)
    return bytes(buf), truncated


@dataclass(frozen=True)
class FetchResult:
    url: str
    final_url: str
    status: int
    content_type: str
    html: str
    bytes: int
    truncated: bool


async def fetch_html(
    url: str,
    *,
    timeout_s: float = FETCH_TIMEOUT_S,
    max_bytes: int = FETCH_MAX_BYTES,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FetchResult:
    if not isinstance(url, str) or not url.strip() or not _is_http_url(url.strip()):
        raise WebToolError("url must be a valid http/https URL")
    url = url.strip()

    headers = {
        "user-agent": USER_AGENT,
        "accept": "text/html,application/xhtml+xml;q=0.9,text/plain;q=0.5",
    }

    async with httpx.AsyncClient(
        follow_redirects=True,
        timeout=httpx.Timeout(timeout_s),
        transport=transport,
    ) as client:
        try:
            async with client.stream("GET", url, headers=headers) as resp:
                status = int(resp.status_code)
                content_type = str(resp.headers.get("content-type", "") or "")
                raw_type = content_type.split(";", 1)[0].strip().lower()

                if status >= 400:
                    body, _ = await _read_limited(resp, min(max_bytes, 200_000))
                    msg = body.decode("utf-8", errors="replace").strip()
                    raise WebToolError(f"Fetch failed ({status}): {msg[:400]}")

                is_text = raw_type.startswith("text/") or raw_type.endswith("+xml") or not raw_type
                if not is_text:
                    raise WebToolError(f"Unsupported content-type: {raw_type or '(unknown)'}")

                data, truncated = await _read_limited(resp, max_bytes=max_bytes)
                if truncated:
                    log.warning("Response from %s truncated at %d bytes", url, max_bytes)
                html = data.decode(resp.encoding or "utf-8", errors="replace")

                return FetchResult(
                    url=url,
                    final_url=str(resp.url),
                    status=status,
                    content_type=raw_type or content_type,
                    html=html,
                    bytes=len(data),
                    truncated=truncated,
                )
        except (httpx.TimeoutException, httpx.HTTPError) as e:
            raise WebToolError(f"Fetch failed: {type(e).__name__}: {e}") from e
