import logging
from pathlib import Path
from typing import Any, Callable, Optional

import httpx

from ..config import ProxySettings
from ..domain.errors import MalformedResponseError, TransportError

logger = logging.getLogger(__name__)

# called with (bytes downloaded so far, total size if known)
ProgressCallback = Callable[[int, Optional[int]], None]


class CatalogTransport:
    """JSON-over-HTTP client used by catalog-backed package sources."""

    def __init__(
        self,
        base_url: str,
        proxy: Optional[ProxySettings] = None,
        verify: bool = True,
        timeout: float = 30.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.proxy = proxy
        self.verify = verify

        client_args = {}
        if proxy is not None:
            logger.debug(f"routing catalog requests through proxy {proxy.url}")
            client_args["proxy"] = proxy.url
        if transport is not None:
            client_args["transport"] = transport
        self.client = httpx.Client(base_url=self.base_url, verify=verify, timeout=timeout, **client_args)

    def get_json(self, path: str) -> Any:
        """
        issue GET {base_url}{path} and return the parsed JSON body.

        raises:
            TransportError: on a non-2xx status (status_code set) or a connection failure
            MalformedResponseError: if the body is not JSON
        """
        logger.debug(f"GET {self.base_url}{path}")
        try:
            response = self.client.get(path)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            raise TransportError(f"GET {path} failed with status {status}", status_code=status) from e
        except httpx.RequestError as e:
            raise TransportError(f"GET {path} failed: {e}") from e

        try:
            return response.json()
        except ValueError as e:
            raise MalformedResponseError(f"GET {path} did not return a JSON document") from e

    def download(self, url: str, target_path: Path, on_progress: Optional[ProgressCallback] = None) -> Path:
        """stream an absolute URL into target_path."""
        logger.debug(f"downloading {url} to {target_path}")
        try:
            with self.client.stream("GET", url) as response:
                response.raise_for_status()

                total_size = None
                if "content-length" in response.headers:
                    total_size = int(response.headers["content-length"])

                downloaded = 0
                with open(target_path, "wb") as f:
                    for chunk in response.iter_bytes():
                        f.write(chunk)
                        downloaded += len(chunk)
                        if on_progress:
                            on_progress(downloaded, total_size)
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            raise TransportError(f"download of {url} failed with status {status}", status_code=status) from e
        except httpx.RequestError as e:
            raise TransportError(f"download of {url} failed: {e}") from e

        return target_path

    def close(self):
        self.client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
