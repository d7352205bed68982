"""
FILE DESCRIPTION: Browser collaborator for the cookie crawler.
KEY FUNCTIONS/CLASSES: BrowserBackend, PlaywrightBrowser, PlaywrightSession, browser_session
"""

from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Dict, List

from playwright.sync_api import Error as PlaywrightError, sync_playwright

from cookie_crawler.core import BROWSER_ARGS, NAV_TIMEOUT, USER_AGENT, logger
from cookie_crawler.errors import CrawlError, ExtractionError, NavigationError

# Resolved href of every anchor, as the browser sees it
LINKS_SCRIPT = "elements => elements.map(e => e.href).filter(Boolean)"


class BrowserBackend(ABC):
    """
    Abstraction for the browser driving the crawl.
    Contractual Requirements for Implementers:
    - acquire MUST return a session with an empty cookie jar.
    - navigate MUST raise NavigationError when the page cannot be loaded.
    - get_cookies / extract_links MUST raise ExtractionError on failure.
    - release MUST be idempotent.
    """
    @abstractmethod
    def acquire(self, headless: bool = True) -> Any:
        pass

    @abstractmethod
    def navigate(self, session: Any, url: str) -> None:
        pass

    @abstractmethod
    def get_cookies(self, session: Any) -> List[Dict[str, Any]]:
        """Return [{name, value, domain, expiry}] for the session's cookie jar."""
        pass

    @abstractmethod
    def extract_links(self, session: Any) -> List[str]:
        """Return absolute href values of anchors on the current page."""
        pass

    @abstractmethod
    def release(self, session: Any) -> None:
        pass


@contextmanager
def browser_session(backend: BrowserBackend, headless: bool = True):
    """
    Scoped acquisition: the session is released exactly once on every exit path
    (normal completion, exception, early return).
    """
    session = backend.acquire(headless)
    try:
        yield session
    finally:
        backend.release(session)


@dataclass
class PlaywrightSession:
    playwright: Any
    browser: Any
    context: Any
    page: Any
    closed: bool = False


class PlaywrightBrowser(BrowserBackend):
    """
    FLOW: Starts Playwright -> Launches Chromium -> Opens one context + page with a clean
    cookie jar -> Navigates / reads cookies / reads anchors on that single page -> Tears everything down.
    """

    def __init__(self, nav_timeout: float = NAV_TIMEOUT, user_agent: str = USER_AGENT, args=None):
        self.nav_timeout = nav_timeout
        self.user_agent = user_agent
        self.args = list(BROWSER_ARGS if args is None else args)

    def acquire(self, headless: bool = True) -> PlaywrightSession:
        playwright = sync_playwright().start()
        try:
            browser = playwright.chromium.launch(headless=headless, args=self.args)
            context = browser.new_context(user_agent=self.user_agent)
            context.clear_cookies()
            page = context.new_page()
        except PlaywrightError as e:
            playwright.stop()
            raise CrawlError(f"Failed to launch browser: {e}") from e

        logger.info(f"[BROWSER] Chromium ready (headless={headless}).", extra={'context': 'browser'})
        return PlaywrightSession(playwright, browser, context, page)

    def navigate(self, session: PlaywrightSession, url: str) -> None:
        try:
            session.page.goto(url, wait_until="load", timeout=self.nav_timeout * 1000)
        except PlaywrightError as e:
            raise NavigationError(url, f"Failed to load {url}: {e}") from e

    def get_cookies(self, session: PlaywrightSession) -> List[Dict[str, Any]]:
        try:
            raw = session.context.cookies()
        except PlaywrightError as e:
            raise ExtractionError(f"Cookie retrieval failed: {e}") from e

        cookies = []
        for c in raw:
            # Playwright reports session cookies with expires == -1
            expires = c.get("expires", -1)
            cookies.append({
                "name": c["name"],
                "value": c.get("value", ""),
                "domain": c.get("domain", ""),
                "expiry": int(expires) if expires and expires > 0 else None,
            })
        return cookies

    def extract_links(self, session: PlaywrightSession) -> List[str]:
        try:
            return session.page.eval_on_selector_all("a[href]", LINKS_SCRIPT)
        except PlaywrightError as e:
            raise ExtractionError(f"Link extraction failed on {session.page.url}: {e}") from e

    def release(self, session: PlaywrightSession) -> None:
        if session.closed:
            return
        session.closed = True
        try:
            for name in ("page", "context", "browser"):
                self._close_quietly(name, getattr(session, name))
        finally:
            session.playwright.stop()
        logger.info("[BROWSER] Browser closed.", extra={'context': 'browser'})

    def _close_quietly(self, name, handle):
        # One failed close must not skip the remaining handles
        try:
            handle.close()
        except PlaywrightError as e:
            logger.warning(f"[BROWSER] Closing {name} failed: {e}", extra={'context': 'browser'})
