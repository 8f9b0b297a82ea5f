"""HTTP session shared by the upstream fetchers."""

from __future__ import annotations

from requests import Session
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from quake_monitor.config import QuakeMonitorConfig

USER_AGENT = "quake-monitor/1.0"
RETRY_STATUSES = (429, 500, 502, 503, 504)


def create_session(config: QuakeMonitorConfig | None = None) -> Session:
    """Session that retries GETs answered with throttling or 5xx statuses.

    Retry count and backoff come from *config*. After the last retry the
    failing response is returned as-is, so callers decide via
    ``raise_for_status()``. Every request asks upstream for a fresh copy.
    """
    if config is None:
        config = QuakeMonitorConfig()

    retry = Retry(
        total=config.http_retries,
        backoff_factor=config.http_backoff_factor,
        status_forcelist=RETRY_STATUSES,
        allowed_methods=["GET"],
        raise_on_status=False,
    )
    session = Session()
    session.headers.update({"User-Agent": USER_AGENT, "Cache-Control": "no-store"})
    adapter = HTTPAdapter(max_retries=retry)
    for prefix in ("https://", "http://"):
        session.mount(prefix, adapter)
    return session
