from typing import Dict, Iterable, List, Mapping

from cookie_crawler.core import SESSION_EXPIRY
from cookie_crawler.models import Cookie


class CookieStore:
    """
    Cookies keyed by name, first sighting wins.
    Later sightings of a known name are ignored entirely, even when the
    domain or path differs (the whole crawl shares one namespace).
    """

    def __init__(self):
        self._cookies: Dict[str, Cookie] = {}

    def record_all(self, cookies: Iterable[Mapping], source_url: str) -> int:
        """Store unseen cookies from one page. Returns how many were new."""
        added = 0
        for cookie in cookies:
            name = cookie["name"]
            if name in self._cookies:
                continue
            expiry = cookie.get("expiry")
            if not expiry or (isinstance(expiry, (int, float)) and expiry < 0):
                expiry = SESSION_EXPIRY
            self._cookies[name] = Cookie(
                name=name,
                value=cookie.get("value", ""),
                domain=cookie.get("domain", ""),
                source_url=source_url,
                expiry=expiry,
            )
            added += 1
        return added

    def snapshot(self) -> List[Cookie]:
        return list(self._cookies.values())

    def __len__(self):
        return len(self._cookies)

    def __contains__(self, name):
        return name in self._cookies
