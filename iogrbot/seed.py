"""Seed fetcher: ask the randomizer site for a new seed permalink.

The configured URL is fetched with a plain GET. A JSON object body must carry
the link in its "permalink" field; a plain-text body that is itself a link is
used as-is.
"""

import json
import urllib.error
import urllib.request

from iogrbot.errors import FetchError

DEFAULT_TIMEOUT = 10  # seconds


class SeedFetcher:
    def __init__(self, url, timeout=DEFAULT_TIMEOUT):
        self.url = url
        self.timeout = timeout

    def __call__(self):
        return self.get_new_seed_permalink()

    def get_new_seed_permalink(self):
        """Fetch a new permalink. Raises FetchError on any failure."""
        if not self.url:
            raise FetchError("no seed_url configured")
        try:
            with urllib.request.urlopen(self.url, timeout=self.timeout) as resp:
                body = resp.read().decode("utf-8", errors="replace")
        except (urllib.error.URLError, OSError, ValueError) as e:
            raise FetchError(f"could not reach {self.url}: {e}") from e
        return permalink_from_body(body)


def permalink_from_body(body):
    """Extract the permalink from a seed service response body."""
    text = body.strip()
    if not text:
        raise FetchError("seed service returned an empty response")
    if text.startswith(("http://", "https://")):
        return text
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise FetchError(f"seed service returned something unexpected: {text[:80]!r}") from e
    link = data.get("permalink") if isinstance(data, dict) else None
    if not isinstance(link, str) or not link.strip():
        raise FetchError("seed service response has no permalink")
    return link.strip()
