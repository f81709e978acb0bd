# io/recorder.py
import json
import sys
from dataclasses import asdict
from typing import Protocol


class Sink(Protocol):
    def write(self, rec: dict) -> None: ...


class JsonlSink:
    def __init__(self, fp=sys.stdout):
        self.fp = fp

    def write(self, rec: dict) -> None:
        self.fp.write(json.dumps(rec) + "\n")


class MemorySink:
    def __init__(self):
        self.records: list[dict] = []

    def write(self, rec: dict) -> None:
        self.records.append(rec)


class Recorder:
    """Fans search results out to sinks as flat dicts."""

    def __init__(self, *sinks: Sink, run_id: str = "local"):
        self.sinks = sinks or (JsonlSink(),)
        self.run_id = run_id

    def emit(self, result) -> dict:
        rec = {"run_id": self.run_id, **asdict(result), "found": result.found}
        rec["start"], rec["goal"] = list(rec["start"]), list(rec["goal"])
        rec["path"] = [list(c) for c in rec["path"]]
        for s in self.sinks:
            s.write(rec)
        return rec
