import json
from typing import Any, Mapping, Optional
from urllib.parse import quote

import requests  # type: ignore
from requests.auth import HTTPBasicAuth  # type: ignore

from .config import Settings
from .exceptions import ResponseDecodeError, TransportError, error_class_for_status
from .logging import logger
from .query import QueryLike, as_request_body, to_query_string


def _segment(name: str) -> str:
    return quote(name, safe="")


class Database:
    """A client for one database on a Cloudant (or CouchDB) server.

    Every method makes a single request, authenticated with HTTP basic auth, and raises a
    subclass of ``CloudantError`` on failure:

    - ``TransportError`` if no response was received,
    - an ``APIError`` subclass if the response status was not 2xx,
    - ``ResponseDecodeError`` if a successful response body was not the expected JSON.

    :param username: Account or API key name.
    :param password: Account password or API key secret.
    :param database: Name of the database to operate on.
    :param host: Base URL of the server, e.g. ``'https://account.cloudant.com'``.
    :param timeout: Seconds to wait for the server before giving up. ``None`` waits forever.
    :param session: An existing ``requests.Session`` to send requests through.
    """

    def __init__(
        self,
        username: str,
        password: str,
        database: str,
        host: str,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.username = username
        self.database = database
        self.host = host.rstrip("/")
        self.timeout = timeout
        self._owns_session = session is None
        self.session = session or requests.Session()
        self.session.auth = HTTPBasicAuth(username, password)
        self.session.headers.update({"Accept": "application/json"})

    @classmethod
    def from_settings(cls, settings: Settings, **kw) -> "Database":
        return cls(
            username=settings.username,
            password=settings.password.get_secret_value(),
            database=settings.database,
            host=settings.host,
            timeout=settings.timeout,
            **kw,
        )

    def __repr__(self) -> str:
        return f"Database(host={self.host!r}, database={self.database!r})"

    def __enter__(self) -> "Database":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def close(self) -> None:
        """Close the session, unless it was passed in by the caller."""
        if self._owns_session:
            self.session.close()

    @property
    def url(self) -> str:
        return f"{self.host}/{_segment(self.database)}"

    def _url(self, *segments: str, params: Optional[Mapping[str, Any]] = None) -> str:
        url = "/".join([self.url, *(_segment(s) for s in segments)])
        query_string = to_query_string(params)
        return f"{url}?{query_string}" if query_string else url

    def _request(self, method: str, url: str, json_body: Any = None) -> requests.Response:
        logger.debug(f"{method} {url}")
        try:
            return self.session.request(method, url, json=json_body, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"{method} {url} failed: {e}")
            raise TransportError(url, f"Request to {url} failed: {e}") from e

    def _check(self, response: requests.Response) -> None:
        if response.status_code // 100 == 2:
            return
        body = response.text
        error = reason = None
        try:
            decoded = json.loads(body)
        except ValueError:
            decoded = None
        if isinstance(decoded, dict):
            error, reason = decoded.get("error"), decoded.get("reason")
        logger.warning(f"{response.url} returned {response.status_code}")
        raise error_class_for_status(response.status_code)(
            response.url,
            response.status_code,
            body=body,
            error=error,
            reason=reason,
            http_reason=response.reason or "",
        )

    def _decode(self, response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Undecodable response body from {response.url}")
            raise ResponseDecodeError(
                response.url, response.text, f"Response from {response.url} is not JSON: {e}"
            ) from e

    def _send(self, method: str, url: str, json_body: Any = None) -> Any:
        response = self._request(method, url, json_body)
        self._check(response)
        return self._decode(response)

    def _write(self, method: str, url: str, doc: Any) -> str:
        response = self._request(method, url, doc)
        self._check(response)
        data = self._decode(response)
        rev = data.get("rev") if isinstance(data, dict) else None
        if not isinstance(rev, str):
            logger.error(f"Response from {url} has no rev")
            raise ResponseDecodeError(url, response.text, f"Response from {url} has no 'rev'.")
        return rev

    def insert(self, doc: Any) -> str:
        """Add a new document and return the rev the server assigned to it.

        :param doc: The JSON-serializable document. If it has no ``_id``, the server makes one.
        """
        return self._write("POST", self.url, doc)

    def get_by_id(self, doc_id: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        """Fetch a single document by its ``_id``.

        :param doc_id: The document id.
        :param params: Extra query parameters, e.g. ``{"rev": "1-abc", "revs_info": True}``.
        """
        return self._send("GET", self._url(doc_id, params=params))

    def update(self, doc_id: str, doc: Any) -> str:
        """Replace a document and return its new rev.

        :param doc_id: The document id.
        :param doc: The new document body, which must carry the current ``_rev``.
        """
        return self._write("PUT", self._url(doc_id), doc)

    def delete(self, doc_id: str, rev: str) -> None:
        """Delete a document. The response body, if any, is not read.

        :param doc_id: The document id.
        :param rev: The current rev of the document.
        """
        response = self._request("DELETE", self._url(doc_id, params={"rev": rev}))
        self._check(response)

    def query(self, query: QueryLike) -> Any:
        """Run a selector query.

        :param query: A ``Query``, or a mapping with the same members.
        """
        return self._send("POST", self._url("_find"), as_request_body(query))

    def view(self, ddoc: str, index_name: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        """Read rows from the view ``index_name`` in the design document ``ddoc``."""
        return self._send("GET", self._url("_design", ddoc, "_view", index_name, params=params))

    def search(
        self, ddoc: str, index_name: str, params: Optional[Mapping[str, Any]] = None
    ) -> Any:
        """Run a full-text search against the index ``index_name`` in the design document ``ddoc``.

        :param params: Search parameters. The lucene query goes in ``q``.
        """
        return self._send(
            "GET", self._url("_design", ddoc, "_search", index_name, params=params)
        )


def setup(username: str, password: str, database: str, host: str) -> Database:
    """Return a ``Database`` for making further requests against ``database`` on ``host``."""
    return Database(username, password, database, host)
