"""MAAS API client for issuing versioned REST requests."""

import requests
from requests.auth import AuthBase
import uuid
from typing import Any, Dict, Optional
from urllib.parse import urljoin
from urllib3.exceptions import InsecureRequestWarning
import logging

from maasapi.errors import ServerError, wrap_with_deserialization_error
from maasapi.utils import join_urls

logger = logging.getLogger(__name__)


class MAASAPIClient:
    """Client for a single API version of a MAAS server.

    Request signing is delegated to a ``requests`` auth object so callers can
    plug in whatever scheme their deployment uses.
    """

    def __init__(
        self,
        base_url: str,
        api_version: str = "2.0",
        auth: Optional[AuthBase] = None,
        verify_ssl: bool = True,
        timeout: float = 30
    ):
        """Initialize MAAS API client.

        Args:
            base_url: MAAS server URL (e.g., 'http://maas.example.com:5240/MAAS')
            api_version: API version path segment (e.g., '2.0')
            auth: Optional requests auth object used to sign every request
            verify_ssl: Whether to verify SSL certificates
            timeout: Request timeout in seconds
        """
        self.base_url = base_url
        self.api_version = api_version
        self.api_url = join_urls(base_url, 'api', api_version)
        self.timeout = timeout

        self.session = requests.Session()
        self.session.auth = auth
        self.session.verify = verify_ssl
        self.session.headers.update({'Accept': 'application/json'})

        if not verify_ssl:
            # Self-signed controller certificates are common
            requests.packages.urllib3.disable_warnings(category=InsecureRequestWarning)

    def url_for(self, path: str) -> str:
        """Resolve an API path or an absolute resource URI.

        Args:
            path: Relative path (e.g. 'machines/') or a resource_uri such as
                '/MAAS/api/2.0/machines/4y3ha3/'

        Returns:
            Full request URL
        """
        return urljoin(self.api_url, path)

    def _request(
        self,
        method: str,
        path: str,
        op: Optional[str] = None,
        params: Optional[Dict[str, Any]] = None,
        data: Optional[Dict[str, Any]] = None
    ) -> Any:
        """Send a request and return the parsed JSON body.

        Args:
            method: HTTP method
            path: API path or resource URI
            op: Optional MAAS operation name, sent as the 'op' query parameter
            params: Optional query parameters
            data: Optional form body

        Returns:
            Parsed JSON response, or None for an empty body

        Raises:
            ServerError: If the server answers with a non-2xx status
            DeserializationError: If the body is not valid JSON
            requests.exceptions.RequestException: On network failure
        """
        url = self.url_for(path)
        query = dict(params or {})
        if op:
            query['op'] = op

        # Correlates the request and response log lines
        request_id = uuid.uuid4().hex[:8]
        logger.debug(f"[{request_id}] {method} {url} params={query}")

        try:
            response = self.session.request(
                method,
                url,
                params=query,
                data=data,
                timeout=self.timeout
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"✗ API request failed for {path}: {e}")
            raise

        logger.debug(f"[{request_id}] {response.status_code} {response.reason}")
        if not response.ok:
            raise ServerError(response.status_code, response.reason, response.text)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise wrap_with_deserialization_error(e, "invalid JSON response for %s", path)

    def get(self, path: str, op: Optional[str] = None, params: Optional[Dict[str, Any]] = None) -> Any:
        """Make a GET request.

        Args:
            path: API path (e.g., 'machines/')
            op: Optional operation name
            params: Optional query parameters

        Returns:
            Parsed JSON response
        """
        return self._request('GET', path, op=op, params=params)

    def post(self, path: str, op: Optional[str] = None, params: Optional[Dict[str, Any]] = None) -> Any:
        """Make a POST request with params sent as a form body."""
        return self._request('POST', path, op=op, data=params)

    def delete(self, path: str) -> None:
        """Make a DELETE request."""
        self._request('DELETE', path)

    def close(self) -> None:
        self.session.close()
