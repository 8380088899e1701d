import logging
from typing import Optional
import httpx
from blog.core.config import settings
from blog.core.exceptions import (
    FetchIOError,
    HttpStatusError,
    InvalidImageError,
    NetworkError,
)
from blog.services.png import is_valid_png


def download_and_store_png(
    url: str,
    destination: str,
    client: Optional[httpx.Client] = None,
    timeout: Optional[float] = None,
) -> None:
    """Download ``url`` and write it to ``destination`` if the body is a PNG.

    Single attempt, no retries. The body is validated before the destination
    is created, so an invalid image leaves nothing on disk. A failed write may
    leave a partial file behind; the caller removes it.
    """
    if timeout is None:
        timeout = settings.avatar_fetch_timeout

    try:
        if client is None:
            with httpx.Client(timeout=timeout, follow_redirects=True) as own_client:
                response = own_client.get(url)
        else:
            response = client.get(url, timeout=timeout)
    except httpx.TimeoutException as e:
        logging.error(f"Avatar download timed out after {timeout}s: {url}")
        raise NetworkError(f"Timed out fetching {url}") from e
    except httpx.HTTPError as e:
        logging.error(f"Avatar download failed: {url}: {str(e)}")
        raise NetworkError(f"Could not fetch {url}: {e}") from e

    if not response.is_success:
        logging.error(f"Avatar source returned {response.status_code}: {url}")
        raise HttpStatusError(response.status_code, url)

    body = response.content
    if not is_valid_png(body):
        logging.error(f"Avatar source did not return a PNG: {url}")
        raise InvalidImageError(f"Body of {url} is not a valid PNG")

    try:
        with open(destination, "wb") as f:
            f.write(body)
    except OSError as e:
        logging.error(f"Could not write avatar to {destination}: {str(e)}")
        raise FetchIOError(f"Could not write {destination}: {e}") from e
