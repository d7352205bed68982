"""
Ordered hook chains run around each page visit.

Pre-visit hooks:  fn(url, crawl_depth)
Post-visit hooks: fn(url, crawl_depth, cookies, session)

Hooks run one at a time, in registration order, and each returns before
the next one (or the next navigation) starts. Register them before the crawl starts.
"""

from typing import Any, Callable, List

from cookie_crawler.errors import HookError
from cookie_crawler.models import Cookie

PreVisitHook = Callable[[str, int], Any]
PostVisitHook = Callable[[str, int, List[Cookie], Any], Any]


class HookChain:

    def __init__(self, kind: str):
        self.kind = kind
        self._hooks: List[Callable] = []
        self._locked = False

    def register(self, fn: Callable) -> Callable:
        if not callable(fn):
            raise TypeError(f"{self.kind} hook must be callable, got {type(fn).__name__}")
        if self._locked:
            raise RuntimeError(f"Cannot register a {self.kind} hook while a crawl is running")
        self._hooks.append(fn)
        return fn

    def fire(self, url: str, crawl_depth: int, *args) -> None:
        for fn in self._hooks:
            try:
                fn(url, crawl_depth, *args)
            except Exception as e:
                raise HookError(fn, url, crawl_depth) from e

    def lock(self):
        self._locked = True

    def unlock(self):
        self._locked = False

    def __len__(self):
        return len(self._hooks)
