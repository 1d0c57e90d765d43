"""Web scraping: fetch a page and extract the text of its body."""

import logging
import time

import requests
from bs4 import BeautifulSoup

from aiagent.config import get_settings

logger = logging.getLogger(__name__)

SCRAPE_FAILED_MESSAGE = "Failed to scrape website."

DEFAULT_BACKOFF = 1.5


class WebOperationError(Exception):
    """Exception raised when a page cannot be fetched or parsed."""

    pass


def _make_request(
    url: str,
    timeout: int | None = None,
    retries: int | None = None,
    backoff: float = DEFAULT_BACKOFF,
) -> requests.Response:
    """GET a URL, retrying transient failures with exponential backoff.

    Args:
        url: URL to request
        timeout: Request timeout in seconds (defaults to settings)
        retries: Number of attempts (defaults to settings)
        backoff: Backoff multiplier between attempts

    Returns:
        Response object with a 2xx status

    Raises:
        WebOperationError: If every attempt fails
    """
    s = get_settings()
    timeout = s.scrape_timeout if timeout is None else timeout
    retries = max(1, s.scrape_retries if retries is None else retries)
    headers = {"User-Agent": s.user_agent}

    last_error = None
    for attempt in range(retries):
        try:
            response = requests.request("GET", url, headers=headers, timeout=timeout)
            response.raise_for_status()
            return response
        except requests.exceptions.Timeout as e:
            last_error = e
            logger.warning(
                f"Request timed out (attempt {attempt + 1}/{retries}): {url}"
            )
        except requests.exceptions.ConnectionError as e:
            last_error = e
            logger.warning(f"Connection error (attempt {attempt + 1}/{retries}): {url}")
        except requests.exceptions.HTTPError as e:
            # Client errors won't change on retry
            if e.response is not None and 400 <= e.response.status_code < 500:
                raise WebOperationError(f"HTTP {e.response.status_code}: {e}") from e
            last_error = e
            logger.warning(f"HTTP error (attempt {attempt + 1}/{retries}): {e}")
        except requests.exceptions.RequestException as e:
            # Malformed URLs and the like; retrying won't help
            raise WebOperationError(f"Invalid request for {url}: {e}") from e

        if attempt < retries - 1:
            sleep_time = backoff**attempt
            logger.debug(f"Retrying in {sleep_time:.1f}s...")
            time.sleep(sleep_time)

    raise WebOperationError(f"Request failed after {retries} attempts: {last_error}")


def extract_body_text(html: str) -> str:
    """Return the readable text of an HTML document's body.

    Script, style and noscript contents are dropped and the remaining text
    nodes are stripped and joined with newlines, so a truncated window holds
    visible text only.
    """
    soup = BeautifulSoup(html, "lxml")
    root = soup.body or soup

    for element in root(["script", "style", "noscript"]):
        element.decompose()

    return root.get_text(separator="\n", strip=True)


def fetch_page_text(url: str, max_chars: int | None = None) -> str:
    """
    Fetch a URL and return at most ``max_chars`` characters of body text.

    The body is parsed as HTML whatever its content type.

    Raises:
        WebOperationError: If the request fails or the body cannot be parsed.
    """
    if max_chars is None:
        max_chars = get_settings().scrape_max_chars

    logger.debug(f"Fetching webpage: {url}")
    response = _make_request(url)

    try:
        text = extract_body_text(response.text)
    except Exception as e:
        raise WebOperationError(f"Error parsing {url}: {e}") from e

    return text[:max_chars]


def scrape_website(url: str) -> str:
    """
    Scrape a page's body text, returning a fixed message on any failure.

    Never raises: failures are logged and reported as SCRAPE_FAILED_MESSAGE.
    Use ``fetch_page_text`` to tell failures apart from empty pages.
    """
    try:
        return fetch_page_text(url)
    except Exception as e:
        logger.warning(f"Error scraping website {url}: {e}")
        return SCRAPE_FAILED_MESSAGE
