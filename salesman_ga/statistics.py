import json
import logging
import queue
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional, Sequence

import numpy as np


logger = logging.getLogger(__name__)


@dataclass
class PopulationStatistics:
    generation: int
    distances: List[float]
    timestamp: datetime

    def summary(self) -> Dict[str, float]:
        if not self.distances:
            return {"best": float("inf"), "mean": float("inf"), "std": 0.0, "worst": float("inf")}
        arr = np.asarray(self.distances, dtype=float)
        return {
            "best": float(arr.min()),
            "mean": float(arr.mean()),
            "std": float(arr.std()),
            "worst": float(arr.max()),
        }

    def to_dict(self) -> Dict:
        return {
            "generation": self.generation,
            "distances": list(self.distances),
            "timestamp": self.timestamp.isoformat(),
        }

    @classmethod
    def from_dict(cls, item: Dict) -> "PopulationStatistics":
        return cls(
            generation=int(item["generation"]),
            distances=[float(d) for d in item["distances"]],
            timestamp=datetime.fromisoformat(item["timestamp"]),
        )


class StatisticsSink(ABC):
    @abstractmethod
    def insert(self, record: PopulationStatistics) -> None:
        raise NotImplementedError


class MemorySink(StatisticsSink):
    def __init__(self):
        self.records: List[PopulationStatistics] = []

    def insert(self, record: PopulationStatistics) -> None:
        self.records.append(record)


class LoggingSink(StatisticsSink):
    def __init__(self, level: int = logging.INFO):
        self.level = level

    def insert(self, record: PopulationStatistics) -> None:
        s = record.summary()
        logger.log(
            self.level,
            "generation %d: best=%.2f mean=%.2f std=%.2f worst=%.2f",
            record.generation,
            s["best"],
            s["mean"],
            s["std"],
            s["worst"],
        )


class JsonLinesSink(StatisticsSink):
    """Appends one JSON object per generation to ``path``."""

    def __init__(self, path: Path):
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def insert(self, record: PopulationStatistics) -> None:
        with self.path.open("a") as f:
            f.write(json.dumps(record.to_dict()) + "\n")


def read_statistics(path: Path) -> List[PopulationStatistics]:
    records = []
    with Path(path).open("r") as f:
        for line in f:
            line = line.strip()
            if line:
                records.append(PopulationStatistics.from_dict(json.loads(line)))
    return records


_STOP = object()


class StatisticsReporter:
    """
    Fire-and-forget hand-off of per-generation distances to a sink.

    ``report`` only enqueues; a daemon thread delivers records to the sink.
    A sink that raises is logged and skipped, and a full queue drops the record,
    so a slow or broken sink never stalls the search.
    """

    def __init__(self, sink: StatisticsSink, max_pending: int = 1000):
        self.sink = sink
        self._queue: "queue.Queue" = queue.Queue(maxsize=max_pending)
        self._closed = False
        self._thread = threading.Thread(
            target=self._run, name="statistics-reporter", daemon=True
        )
        self._thread.start()

    def report(self, generation: int, distances: Sequence[float]) -> None:
        if self._closed:
            logger.warning("reporter closed; dropping generation %d", generation)
            return
        record = PopulationStatistics(
            generation=generation,
            distances=list(distances),
            timestamp=datetime.now(timezone.utc),
        )
        try:
            self._queue.put_nowait(record)
        except queue.Full:
            logger.warning("statistics queue full; dropping generation %d", generation)

    def _run(self) -> None:
        while True:
            record = self._queue.get()
            try:
                if record is _STOP:
                    return
                self.sink.insert(record)
            except Exception:
                logger.exception("statistics sink failed for generation %d", record.generation)
            finally:
                self._queue.task_done()

    def flush(self) -> None:
        """Block until every queued record has been handed to the sink."""
        self._queue.join()

    def close(self, timeout: Optional[float] = 5.0) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            self._queue.put(_STOP, timeout=timeout)
        except queue.Full:
            # The sink is stuck; leave the daemon thread behind.
            logger.warning("statistics sink still busy; abandoning %d pending records", self._queue.qsize())
            return
        self._thread.join(timeout)
        if self._thread.is_alive():
            logger.warning("statistics sink did not finish within %.1fs", timeout)

    def __enter__(self) -> "StatisticsReporter":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
