"""OSMCHA API client for making authenticated requests."""

import os
import logging
from typing import Dict, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .errors import NetworkError
from .validation import validate_request

DEFAULT_BASE_URL = "https://osmcha.mapbox.com/api/v1/changesets/"

# OSMCHA expects "Authorization: Token <secret>"
AUTH_SCHEME = "Token "


class OsmchaAPIClient:
    """Sends validated, token-authenticated GET requests to OSMCHA."""

    def __init__(self, token: str = None, base_url: str = None, timeout: Optional[float] = None,
                 pool_size: int = 50):
        """Initialize the OSMCHA API client.

        Args:
            token: OSMCHA API secret, without the "Token " prefix
            base_url: Root URL of the changesets endpoint
            timeout: Optional per-request timeout in seconds (None waits forever)
            pool_size: Connection pool size for concurrent comment fetches
        """
        # Use provided token or fall back to environment variable
        self.token = token or os.environ.get('OSMCHA_AUTH_KEY') or os.environ.get('OsmchaAuthKey')
        self.base_url = base_url or os.environ.get('OSMCHA_BASE_URL') or DEFAULT_BASE_URL
        if not self.base_url.endswith('/'):
            self.base_url += '/'
        self.timeout = timeout
        self.session = requests.Session()

        # Failed requests are never retried; a failure aborts the chain that issued it
        adapter = HTTPAdapter(
            pool_connections=pool_size,
            pool_maxsize=pool_size,
            max_retries=Retry(total=0, raise_on_status=False)
        )
        self.session.mount('https://', adapter)
        self.session.mount('http://', adapter)

        if self.token:
            logging.info("Initialized OSMCHA API client with token")
        else:
            logging.warning("No OSMCHA token provided. Requests will fail validation.")
            logging.warning("Set OSMCHA_AUTH_KEY environment variable or pass token as argument.")

    def build_request(self, url: str) -> Dict:
        """Build a request descriptor for a GET against the given URL.

        Args:
            url: Complete request URL

        Returns:
            Request descriptor dictionary carrying the raw token
        """
        return {
            'url': url,
            'method': 'GET',
            'headers': {
                'Authorization': self.token,
                'Content-Type': 'application/json',
            },
        }

    def execute_request(self, options: Dict) -> str:
        """Validate and send a single request, returning the raw body text.

        Args:
            options: Request descriptor (see :mod:`osmcha_logs.validation`)

        Returns:
            Response body as text; parsing is left to the caller

        Raises:
            ValidationError: If the descriptor is malformed
            NetworkError: If the request fails or the server answers with an error status
        """
        validate_request(options)

        headers = dict(options['headers'])
        headers['Authorization'] = AUTH_SCHEME + headers['Authorization']
        url = options['url']

        logging.debug(f"{options['method']} {url}")
        try:
            response = self.session.request(options['method'], url, headers=headers,
                                            timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            status_code = e.response.status_code if e.response is not None else None
            logging.error(f"OSMCHA API request to {url} failed with status {status_code}: {e}")
            raise NetworkError(str(e), url=url, status_code=status_code) from e
        except requests.exceptions.RequestException as e:
            logging.error(f"OSMCHA API request to {url} failed: {e}")
            raise NetworkError(str(e), url=url) from e

        return response.text
