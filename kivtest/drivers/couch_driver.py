"""
CouchDB HTTP Client.

Speaks the CouchDB REST protocol over ``requests``. Serves the couch16,
couch20, cloudant and kivikServer suites.
"""

from __future__ import annotations

from typing import Any, List, Optional
from urllib.parse import quote, urlsplit, urlunsplit

import requests
from loguru import logger

from kivtest.drivers.base import BackendClient, ServerInfo, public_netloc
from kivtest.errors import BackendError


class CouchClient(BackendClient):
    """
    Client for a CouchDB-compatible server.

    Credentials embedded in the DSN are sent as HTTP basic auth and stripped
    from the base URL.
    """

    def __init__(self, dsn: str, timeout_sec: int = 30) -> None:
        super().__init__(dsn)
        parsed = urlsplit(dsn)
        self.base_url = urlunsplit(
            (parsed.scheme, public_netloc(parsed), parsed.path.rstrip("/"), "", "")
        )
        self.timeout_sec = timeout_sec
        self._session: Optional[requests.Session] = None

    def _get_session(self) -> requests.Session:
        if self._session is None:
            self._session = requests.Session()
            self._session.headers.update({
                "Content-Type": "application/json",
                "Accept": "application/json",
            })
            if self.authenticated:
                self._session.auth = (self.username, self.password)
        return self._session

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        """
        Make a request against the server and return the parsed JSON body.

        Raises:
            BackendError: With the HTTP status on error responses, or with
                          no status when the server cannot be reached.
        """
        url = f"{self.base_url}{path}"
        logger.debug(f"CouchDB {method} {url}")
        try:
            response = self._get_session().request(
                method=method,
                url=url,
                timeout=self.timeout_sec,
                **kwargs,
            )
        except requests.exceptions.RequestException as e:
            raise BackendError(f"{method} {url} failed: {e}") from e

        if response.status_code >= 400:
            reason = ""
            try:
                reason = response.json().get("reason", "")
            except ValueError:
                reason = response.text
            raise BackendError(
                f"{method} {url}: {response.status_code} {reason}".rstrip(),
                status=response.status_code,
            )
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise BackendError(f"{method} {url}: response is not JSON: {e}") from e

    @staticmethod
    def _db_path(name: str) -> str:
        return "/" + quote(name, safe="")

    def connect(self) -> None:
        self._request("GET", "/")
        self._connected = True
        logger.info(f"CouchClient connected to {self.base_url}")

    def close(self) -> None:
        if self._session is not None:
            self._session.close()
            self._session = None
        super().close()

    def server_info(self) -> ServerInfo:
        body = self._request("GET", "/")
        if not isinstance(body, dict):
            raise BackendError(f"GET /: expected a JSON object, got {type(body).__name__}")
        vendor = body.get("vendor", {})
        return ServerInfo(
            vendor=vendor.get("name", "") if isinstance(vendor, dict) else "",
            version=str(body.get("version", "")),
        )

    def all_dbs(self) -> List[str]:
        body = self._request("GET", "/_all_dbs")
        if not isinstance(body, list):
            raise BackendError(f"GET /_all_dbs: expected a JSON array, got {type(body).__name__}")
        return [str(name) for name in body]

    def create_db(self, name: str) -> None:
        self._request("PUT", self._db_path(name))

    def destroy_db(self, name: str) -> None:
        self._request("DELETE", self._db_path(name))

    def db_exists(self, name: str) -> bool:
        try:
            self._request("HEAD", self._db_path(name))
        except BackendError as e:
            if e.status == 404:
                return False
            raise
        return True
