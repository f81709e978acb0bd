# astar3d/app/demo.py
import logging

from astar3d.app.build import build
from astar3d.io.recorder import MemorySink
from astar3d.search.astar import SearchResult

SAMPLE = {
    "name": "sample",
    "run_id": "demo",
    "graph": {"size": (3, 3, 3), "style": "manhattan"},
    "queries": [{"start": (0, 0, 0), "goal": (2, 2, 2)}],
}


def main() -> SearchResult:
    app = build(SAMPLE, sinks=(MemorySink(),))
    (res,) = app.run()
    log = logging.getLogger("astar3d")
    for i, node in enumerate(app.astar.get_path()):
        log.info("path_node", extra={"extra": {"i": i, "node": list(node.coord), "g": node.g}})
    return res


if __name__ == "__main__":
    main()
