from dataclasses import dataclass, asdict
from typing import Dict, Any, Union

@dataclass(frozen=True)
class FrontierEntry:
    """
    A pending visit owned by the Frontier.
    Consumed exactly once when dequeued.
    """
    url: str
    crawl_depth: int

@dataclass(frozen=True)
class Cookie:
    """
    A cookie as first seen during the crawl.
    INVARIANT: Never replaced once stored (first sighting of a name wins).
    expiry is the browser's expiry timestamp or "session".
    """
    name: str
    value: str
    domain: str
    source_url: str
    expiry: Union[int, float, str]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

@dataclass(frozen=True)
class CrawlConfig:
    """
    Immutable per-crawl settings.
    domain is the scope prefix derived from start_url (scheme://host/).
    """
    start_url: str
    domain: str
    max_crawl_depth: int = 0
