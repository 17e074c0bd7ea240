# json_table_editor/client.py
import logging
import threading
from contextlib import contextmanager
from typing import Any, Dict, Optional

import requests

from json_table_editor.config import API_BASE, REQUEST_TIMEOUT
from json_table_editor.errors import NetworkError

logger = logging.getLogger(__name__)


class ApiClient:
    """
    Talks to the /api/data endpoints. At most one load and one save can be in
    flight at a time; a second request of the same kind is rejected.
    """

    def __init__(self, base_url: str = API_BASE, timeout: float = REQUEST_TIMEOUT,
                 http: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.http = http or requests.Session()
        self._in_flight: Dict[str, threading.Lock] = {
            "load": threading.Lock(),
            "save": threading.Lock(),
        }

    @contextmanager
    def _guard(self, kind: str):
        lock = self._in_flight[kind]
        if not lock.acquire(blocking=False):
            raise NetworkError(f"A {kind} request is already in progress")
        try:
            yield
        finally:
            lock.release()

    def load_document(self) -> Any:
        with self._guard("load"):
            resp = self._request("GET")
            return self._json(resp)

    def save_document(self, document: Any) -> Dict[str, Any]:
        with self._guard("save"):
            resp = self._request("POST", json=document)
            result = self._json(resp)
            if not isinstance(result, dict) or not result.get("success"):
                raise NetworkError("The server returned an error")
            return result

    def _request(self, method: str, **kwargs) -> requests.Response:
        url = f"{self.base_url}/data"
        logger.debug("%s %s", method, url)
        try:
            resp = self.http.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise NetworkError(f"Could not reach {url}: {e}") from e
        if not resp.ok:
            raise NetworkError(f"Server answered {resp.status_code}: {_error_text(resp)}")
        return resp

    @staticmethod
    def _json(resp: requests.Response) -> Any:
        try:
            return resp.json()
        except ValueError as e:
            raise NetworkError("The server response is not valid JSON") from e


def _error_text(resp: requests.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.text
    if isinstance(body, dict) and "error" in body:
        return str(body["error"])
    return resp.text
