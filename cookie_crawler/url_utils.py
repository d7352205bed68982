from urllib.parse import urlsplit, urlunsplit

from cookie_crawler.errors import ConfigError
from cookie_crawler.models import CrawlConfig

ALLOWED_SCHEMES = ("http", "https")


def canonicalize_url(url: str) -> str:
    """
    Canonical form used as the frontier's dedup and scope key:
    - everything from the first '#' dropped
    - then everything from the first '?' dropped
    Relative URLs are returned as-is (never resolved).
    """
    url = url.split("#", 1)[0]
    return url.split("?", 1)[0]


def normalize_start_url(url: str) -> str:
    """
    Validates the start URL and rebuilds it with:
    - lowercase scheme and host (browsers report resolved hrefs that way)
    - an explicit root path for a bare host (https://example.com -> https://example.com/)
    so the start URL falls inside its own scope prefix.
    """
    if not isinstance(url, str) or not url.strip():
        raise ConfigError("Start URL must be a non-empty string")

    url = url.strip()
    parts = urlsplit(url)
    scheme = parts.scheme.lower()
    if scheme not in ALLOWED_SCHEMES:
        raise ConfigError(f"Start URL must use http or https: {url!r}")
    if not parts.hostname:
        raise ConfigError(f"Start URL has no host: {url!r}")

    # userinfo keeps its case, host[:port] does not
    userinfo, at, hostport = parts.netloc.rpartition("@")
    netloc = userinfo + at + hostport.lower()

    return urlunsplit((scheme, netloc, parts.path or "/", parts.query, parts.fragment))


def get_domain_of(url: str) -> str:
    """
    Scope prefix of a start URL: everything from 'http://' or 'https://'
    up to and including the first '/' after the host.
    """
    parts = urlsplit(normalize_start_url(url))
    return f"{parts.scheme}://{parts.netloc}/"


def build_crawl_config(start_url: str, max_crawl_depth=None) -> CrawlConfig:
    """
    FLOW: Validates start URL -> Derives scope prefix -> Validates depth -> Returns frozen CrawlConfig.
    Raises ConfigError before any browser work happens.
    """
    if max_crawl_depth is None:
        max_crawl_depth = 0
    if isinstance(max_crawl_depth, bool) or not isinstance(max_crawl_depth, int):
        raise ConfigError(f"max_crawl_depth must be an integer, got {max_crawl_depth!r}")
    if max_crawl_depth < 0:
        raise ConfigError(f"max_crawl_depth must not be negative, got {max_crawl_depth}")

    normalized = normalize_start_url(start_url)
    return CrawlConfig(
        start_url=normalized,
        domain=get_domain_of(normalized),
        max_crawl_depth=max_crawl_depth,
    )
