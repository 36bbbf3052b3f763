from __future__ import annotations

import dataclasses
import logging
from typing import Optional

import requests

from .errors import TransportError

log = logging.getLogger(__name__)

METHODS = ("GET", "POST")


@dataclasses.dataclass(frozen=True)
class RawResponse:
    body: bytes
    ok: bool
    status_code: Optional[int] = None
    error: Optional[str] = None


@dataclasses.dataclass
class Client:
    timeout: float = 5.0
    method: str = "GET"
    session: Optional[requests.Session] = None

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def _s(self) -> requests.Session:
        if self.session is None:
            self.session = requests.Session()
        return self.session

    def close(self) -> None:
        if self.session is not None:
            self.session.close()
            self.session = None

    @staticmethod
    def url(address: str, command: str) -> str:
        # command is already escaped; do not re-encode it
        return f"http://{address}/cm?cmnd={command}"

    # --- Device command endpoint ---
    def send(self, address: str, command: str) -> RawResponse:
        """Issue one request to the device's ``/cm`` endpoint.

        Only HTTP 200 counts as success. Connection errors and timeouts are
        folded into ``ok=False`` with the reason in ``error``; the body of a
        non-200 answer is kept for diagnostics.
        """
        url = self.url(address, command)
        log.debug("URL: %s", url)
        try:
            with self._s().request(self.method, url, timeout=self.timeout) as r:
                body = r.content
                status = r.status_code
        except requests.RequestException as e:
            log.debug("Request to %s failed: %s", address, e)
            return RawResponse(body=b"", ok=False, error=str(e))
        log.debug("HTTP status = %s", status)
        return RawResponse(body=body, ok=status == 200, status_code=status)

    def fetch(self, address: str, command: str) -> bytes:
        resp = self.send(address, command)
        if not resp.ok:
            if resp.status_code is not None:
                log.debug("Unsuccessful response (%s): %r", resp.status_code, resp.body)
                msg = f"Could not reach device {address}: HTTP {resp.status_code}"
            else:
                msg = f"Could not reach device {address}: {resp.error}"
            raise TransportError(msg, status_code=resp.status_code, body=resp.body)
        log.debug("Successful response: %s", resp.body.decode("utf-8", errors="replace"))
        return resp.body
