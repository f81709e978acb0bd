# io/search_logging.py
import json
import logging
import sys

from astar3d.search.hooks import NoopHooks


class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "level": record.levelname,
            "msg": record.getMessage(),
            "logger": record.name,
        }
        extra = getattr(record, "extra", None)
        if isinstance(extra, dict):
            payload.update(extra)
        return json.dumps(payload, default=str)


def default_json_logger(name="astar3d", level="INFO"):
    logger = logging.getLogger(name)
    if not logger.handlers:
        h = logging.StreamHandler(sys.stdout)
        h.setFormatter(_JsonFormatter())
        logger.addHandler(h)
        logger.setLevel(level)
    return logger


def _xyz(node) -> list[int]:
    return list(node.coord)


class SearchLogging(NoopHooks):
    """
    Structured JSON logs for search lifecycle events.
    """

    def __init__(
        self,
        run_id: str = "local",
        level: str = "INFO",
        debug: bool = False,
        sample_every: int = 1000,
        logger: logging.Logger | None = None,
    ):
        self.run_id, self.debug, self.sample_every = run_id, debug, max(1, sample_every)
        self.log = logger or default_json_logger(level=level)
        self._searches = 0

    def _emit(self, level: str, msg: str, **extra):
        payload = {"run_id": self.run_id, "search": self._searches}
        self.log.log(getattr(logging, level), msg, extra={"extra": {**payload, **extra}})

    def search_start(self, *, start, goal, style, qsize):
        self._searches += 1
        self._emit("INFO", "search_start", start=_xyz(start), goal=_xyz(goal), style=style.value)

    def expand(self, node, *, expanded, qsize):
        if self.debug and (expanded % self.sample_every) == 0:
            self._emit(
                "DEBUG", "expand", node=_xyz(node), g=node.g, f=node.f, expanded=expanded, qsize=qsize
            )

    def search_end(self, *, found, expanded, cost, path_len, wall_ms):
        self._emit(
            "INFO",
            "search_end",
            found=found,
            expanded=expanded,
            cost=cost,
            path_len=path_len,
            wall_ms=round(wall_ms, 3),
        )

    def error(self, *, reason: str, **kw):
        self._emit("ERROR", "search_error", reason=reason, **kw)
