"""
Frontier for the cookie crawler.
Keeps BFS crawl order, prevents duplicate visits within a single run,
enforces maximum crawl depth and keeps the crawl inside the start URL's domain.
"""

from collections import deque

from cookie_crawler.core import EXCLUDED_SUFFIXES, logger
from cookie_crawler.models import FrontierEntry
from cookie_crawler.url_utils import canonicalize_url


class Frontier:
    """
    FIFO queue plus a marked set (every URL ever accepted).
    URLs are marked at acceptance time, before they are visited, so a link found
    on several pages is queued only once. Built per crawl, never shared.
    """

    def __init__(self, domain, max_crawl_depth=0, excluded_suffixes=EXCLUDED_SUFFIXES):
        self.domain = domain
        self.max_crawl_depth = max_crawl_depth
        self.excluded_suffixes = tuple(excluded_suffixes)
        self._queue = deque()
        # dict keeps acceptance order for marked_urls()
        self._marked = {}

    def enqueue(self, url, crawl_depth) -> bool:
        """
        Rules (all must hold, otherwise silently skipped):
        - crawl_depth must not exceed max_crawl_depth
        - canonical URL must start with the domain prefix
        - canonical URL must not end with an excluded suffix
        - canonical URL must not have been accepted before
        Returns True if the URL was queued.
        """
        if crawl_depth > self.max_crawl_depth:
            self._log_skip(url, f"depth {crawl_depth} > {self.max_crawl_depth}")
            return False

        canonical = canonicalize_url(url)

        if not canonical.startswith(self.domain):
            self._log_skip(url, "out of scope")
            return False
        if canonical.endswith(self.excluded_suffixes):
            self._log_skip(url, "excluded extension")
            return False
        if canonical in self._marked:
            self._log_skip(url, "already marked")
            return False

        self._marked[canonical] = None
        self._queue.append(FrontierEntry(canonical, crawl_depth))
        logger.debug(
            f"enqueue: queued {canonical} (depth={crawl_depth}) pending={len(self._queue)}",
            extra={'context': 'frontier'},
        )
        return True

    def has_next(self) -> bool:
        return bool(self._queue)

    def dequeue(self) -> FrontierEntry:
        # Caller must check has_next() first
        if not self._queue:
            raise IndexError("dequeue from an empty frontier")
        return self._queue.popleft()

    def pending_count(self) -> int:
        return len(self._queue)

    def marked_urls(self):
        return list(self._marked)

    def _log_skip(self, url, reason):
        logger.debug(f"enqueue: skipped {url}, reason: {reason}", extra={'context': 'frontier'})
