class CrawlError(Exception):
    """Base cookie crawler exception."""
    pass

class ConfigError(CrawlError):
    """Raised when the start URL or depth cannot produce a valid crawl config."""
    pass

class NavigationError(CrawlError):
    """Raised when the browser cannot load a page."""
    def __init__(self, url, message=None):
        self.url = url
        super().__init__(message or f"Failed to load {url}")

class ExtractionError(CrawlError):
    """Raised when cookie retrieval or link extraction fails."""
    pass

class HookError(CrawlError):
    """
    Raised when a caller-supplied pre-/post-visit hook fails.
    The hook's own exception is chained as __cause__.
    """
    def __init__(self, hook, url, depth):
        self.hook = hook
        self.url = url
        self.depth = depth
        name = getattr(hook, "__name__", type(hook).__name__)
        super().__init__(f"Hook {name} failed for {url} (depth={depth})")
