from cookie_crawler.models import Cookie, CrawlConfig, FrontierEntry
from cookie_crawler.frontier import Frontier
from cookie_crawler.cookie_store import CookieStore
from cookie_crawler.browser import (
    BrowserBackend,
    PlaywrightBrowser,
    PlaywrightSession,
    browser_session
)
from cookie_crawler.crawler import CookieCrawler
from cookie_crawler.errors import (
    CrawlError,
    ConfigError,
    NavigationError,
    ExtractionError,
    HookError
)
from cookie_crawler.url_utils import canonicalize_url, get_domain_of
