"""
FILE DESCRIPTION: Crawl orchestration for the cookie crawler.
KEY FUNCTIONS/CLASSES: CookieCrawler
"""

from typing import List, Optional

from cookie_crawler.browser import BrowserBackend, PlaywrightBrowser, browser_session
from cookie_crawler.cookie_store import CookieStore
from cookie_crawler.core import logger
from cookie_crawler.errors import CrawlError
from cookie_crawler.frontier import Frontier
from cookie_crawler.hooks import HookChain, PostVisitHook, PreVisitHook
from cookie_crawler.models import Cookie
from cookie_crawler.url_utils import build_crawl_config


class CookieCrawler:
    """
    FLOW: Seeds a fresh Frontier with the start URL -> Opens one browser session ->
    Dequeues URLs breadth-first -> Runs pre-visit hooks -> Navigates and reads cookies ->
    Extracts and enqueues links while depth allows -> Runs post-visit hooks ->
    Releases the browser and returns every distinct cookie found.

    Hooks must be registered before start_crawl() is called.
    """

    def __init__(self, start_url: str, max_crawl_depth: Optional[int] = 0, browser: Optional[BrowserBackend] = None):
        # Raises ConfigError before any browser work
        self.config = build_crawl_config(start_url, max_crawl_depth)
        self.browser = browser if browser is not None else PlaywrightBrowser()
        self._pre_visit_hooks = HookChain("pre-visit")
        self._post_visit_hooks = HookChain("post-visit")
        self._frontier: Optional[Frontier] = None
        self._cookie_store = CookieStore()
        self._visited: List[str] = []

    @property
    def start_url(self) -> str:
        return self.config.start_url

    @property
    def domain(self) -> str:
        return self.config.domain

    @property
    def max_crawl_depth(self) -> int:
        return self.config.max_crawl_depth

    def register_pre_visit_hook(self, fn: PreVisitHook) -> PreVisitHook:
        """fn(url, crawl_depth) runs before the URL is navigated to."""
        return self._pre_visit_hooks.register(fn)

    def register_post_visit_hook(self, fn: PostVisitHook) -> PostVisitHook:
        """
        fn(url, crawl_depth, cookies, session) runs after the page is loaded and scraped.
        session is the live browser handle, so hooks can run scripts on the page.
        """
        return self._post_visit_hooks.register(fn)

    before_url_visit = register_pre_visit_hook
    after_url_rendered = register_post_visit_hook

    def start_crawl(self, headless: bool = True) -> List[Cookie]:
        """
        Crawl from start_url up to max_crawl_depth.
        Returns all cookies found, in order of first sighting.
        Any CrawlError aborts the crawl; the browser is released either way.
        """
        self._frontier = Frontier(self.config.domain, self.config.max_crawl_depth)
        self._cookie_store = CookieStore()
        self._visited = []

        if not self._frontier.enqueue(self.config.start_url, 0):
            self.log("warning", f"Start URL rejected by frontier: {self.config.start_url}")

        self.log("info", f"Starting crawl of {self.config.start_url} (domain={self.config.domain}, max_depth={self.config.max_crawl_depth})")

        self._pre_visit_hooks.lock()
        self._post_visit_hooks.lock()
        try:
            with browser_session(self.browser, headless) as session:
                while self._frontier.has_next():
                    entry = self._frontier.dequeue()
                    self._visit_url(session, entry.url, entry.crawl_depth)
        except CrawlError as e:
            self.log("error", f"Crawl aborted after {len(self._visited)} visits: {e}")
            raise
        finally:
            self._pre_visit_hooks.unlock()
            self._post_visit_hooks.unlock()

        cookies = self._cookie_store.snapshot()
        self.log("info", f"Crawl finished: {len(self._visited)} URLs visited, {len(cookies)} cookies found")
        return cookies

    def found_cookies(self) -> List[Cookie]:
        """Cookies gathered so far by the latest crawl, including one that failed."""
        return self._cookie_store.snapshot()

    def visited_urls(self) -> List[str]:
        return list(self._visited)

    def marked_urls(self) -> List[str]:
        """Every URL the latest crawl accepted into its frontier."""
        return self._frontier.marked_urls() if self._frontier else []

    def _visit_url(self, session, url: str, crawl_depth: int) -> None:
        self._pre_visit_hooks.fire(url, crawl_depth)

        self.log("info", f"Visiting (depth={crawl_depth}): {url}")
        self.browser.navigate(session, url)
        self._visited.append(url)

        cookies = self.browser.get_cookies(session)

        links = []
        if crawl_depth < self.config.max_crawl_depth:
            links = self.browser.extract_links(session)

        added = self._cookie_store.record_all(cookies, url)
        if added:
            self.log("info", f"{added} new cookies on {url} ({len(self._cookie_store)} total)")

        if crawl_depth < self.config.max_crawl_depth:
            queued = sum(1 for link in links if self._frontier.enqueue(link, crawl_depth + 1))
            self.log("debug", f"{queued}/{len(links)} links queued from {url}")

        self._post_visit_hooks.fire(url, crawl_depth, self._cookie_store.snapshot(), session)

    def log(self, level, msg):
        getattr(logger, level)(msg, extra={'context': 'crawler'})
