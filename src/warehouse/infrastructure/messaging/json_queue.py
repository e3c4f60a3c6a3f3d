"""File-based message queue connecting the two services across processes.

Each topic is an append-only JSON Lines file. The receiver keeps the
number of handled lines in ``<topic>.offset`` and saves it after every
message, so a crash between handling and saving redelivers that message
(at-least-once). Messages whose handler raises are appended to
``<topic>.dead.jsonl`` together with the error, and draining continues.
``redeliver_dead_letters`` retries them once the cause has been fixed.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

import structlog

from warehouse.command.application.event_publisher import EventPublisher
from warehouse.shared.events import (
    ProductEvent,
    from_message,
    to_message,
    topic_for,
)

logger = structlog.get_logger(__name__)


@dataclass
class DrainReport:
    topic: str
    delivered: int = 0
    dead_lettered: list[str] = field(default_factory=list)


class JsonQueuePublisher(EventPublisher):

    def __init__(self, queue_dir: Path) -> None:
        self._queue_dir = queue_dir
        self._queue_dir.mkdir(parents=True, exist_ok=True)

    def publish(self, event: ProductEvent) -> None:
        path = self._queue_dir / f"{topic_for(event)}.jsonl"
        with path.open("a", encoding="utf-8") as fh:
            fh.write(json.dumps(to_message(event)) + "\n")


class JsonQueueReceiver:

    def __init__(self, queue_dir: Path) -> None:
        self._queue_dir = queue_dir
        self._queue_dir.mkdir(parents=True, exist_ok=True)

    def drain(self, topic: str, handler: Callable[[ProductEvent], None]) -> DrainReport:
        """Deliver every message published since the last drain."""
        report = DrainReport(topic=topic)
        queue_path = self._queue_dir / f"{topic}.jsonl"
        if not queue_path.exists():
            return report

        lines = queue_path.read_text(encoding="utf-8").splitlines()
        offset = self._load_offset(topic)

        for position in range(offset, len(lines)):
            line = lines[position]
            try:
                handler(from_message(json.loads(line)))
                report.delivered += 1
            except Exception as exc:
                self._dead_letter(topic, line, exc)
                report.dead_lettered.append(str(exc))
            self._save_offset(topic, position + 1)

        return report

    def dead_letters(self, topic: str) -> list[dict]:
        path = self._queue_dir / f"{topic}.dead.jsonl"
        if not path.exists():
            return []
        return [
            json.loads(line)
            for line in path.read_text(encoding="utf-8").splitlines()
            if line.strip()
        ]

    def redeliver_dead_letters(
        self, topic: str, handler: Callable[[ProductEvent], None]
    ) -> DrainReport:
        """Hand every dead letter of ``topic`` to ``handler`` again.

        Letters that are handled leave the dead-letter file; letters that
        fail again stay in it with their latest error.
        """
        report = DrainReport(topic=topic)
        still_dead: list[dict] = []

        for letter in self.dead_letters(topic):
            try:
                handler(from_message(json.loads(letter["message"])))
                report.delivered += 1
            except Exception as exc:
                still_dead.append(_dead_entry(letter["message"], exc))
                report.dead_lettered.append(str(exc))

        self._write_dead_letters(topic, still_dead)
        logger.info(
            "Dead letters redelivered",
            topic=topic,
            delivered=report.delivered,
            still_dead=len(still_dead),
        )
        return report

    # --- Internal helpers -----------------------------------------------------

    def _dead_letter(self, topic: str, line: str, exc: Exception) -> None:
        logger.warning("Message dead-lettered", topic=topic, error=str(exc))
        with (self._queue_dir / f"{topic}.dead.jsonl").open("a", encoding="utf-8") as fh:
            fh.write(json.dumps(_dead_entry(line, exc)) + "\n")

    def _write_dead_letters(self, topic: str, entries: list[dict]) -> None:
        path = self._queue_dir / f"{topic}.dead.jsonl"
        if not entries:
            path.unlink(missing_ok=True)
            return
        path.write_text(
            "".join(json.dumps(entry) + "\n" for entry in entries), encoding="utf-8"
        )

    def _load_offset(self, topic: str) -> int:
        path = self._queue_dir / f"{topic}.offset"
        if not path.exists():
            return 0
        return int(path.read_text(encoding="utf-8").strip() or 0)

    def _save_offset(self, topic: str, offset: int) -> None:
        (self._queue_dir / f"{topic}.offset").write_text(str(offset), encoding="utf-8")


def _dead_entry(line: str, exc: Exception) -> dict:
    return {"message": line, "error": str(exc), "error_type": type(exc).__name__}
