# search/hooks.py
from typing import Protocol

from astar3d.domain.entities.node import Node


class SearchHooks(Protocol):
    def search_start(self, *, start: Node, goal: Node, style, qsize): ...
    def expand(self, node: Node, *, expanded, qsize): ...
    def search_end(self, *, found, expanded, cost, path_len, wall_ms): ...
    def error(self, *, reason: str, **kw): ...


class NoopHooks:
    def search_start(self, **_):
        pass

    def expand(self, *_, **__):
        pass

    def search_end(self, **_):
        pass

    def error(self, **_):
        pass
