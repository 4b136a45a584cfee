"""
Attachment sinks for run diagnostics.

A sink only observes: it receives named text or byte attachments (latency,
raw popup text, drift, screenshots) and nothing in the check reads them back.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

log = logging.getLogger(__name__)

TEXT = "text/plain"
PNG = "image/png"

_EXTENSIONS = {TEXT: ".txt", PNG: ".png"}


@dataclass(frozen=True)
class Attachment:
    name: str
    body: str | bytes
    content_type: str = TEXT


class MemoryReport:
    """Keeps attachments in order; used by tests and as the default sink."""

    def __init__(self) -> None:
        self.attachments: list[Attachment] = []

    def attach(self, name: str, body: str | bytes, content_type: str = TEXT) -> None:
        self.attachments.append(Attachment(name, body, content_type))

    def get(self, name: str) -> str | bytes | None:
        """Most recent attachment body with this name."""
        for attachment in reversed(self.attachments):
            if attachment.name == name:
                return attachment.body
        return None

    def names(self) -> list[str]:
        return [a.name for a in self.attachments]


class DirectoryReport(MemoryReport):
    """Writes every attachment to ``directory`` plus an ``attachments.json`` index."""

    def __init__(self, directory: Path) -> None:
        super().__init__()
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)
        self._index: list[dict] = []

    def attach(self, name: str, body: str | bytes, content_type: str = TEXT) -> None:
        super().attach(name, body, content_type)
        path = self.directory / self._file_name(name, content_type)
        if isinstance(body, bytes):
            path.write_bytes(body)
        else:
            path.write_text(body, encoding="utf-8")
        self._index.append({
            "name": name,
            "file": path.name,
            "content_type": content_type,
            "captured_at": datetime.now(timezone.utc).isoformat(),
        })
        (self.directory / "attachments.json").write_text(
            json.dumps(self._index, indent=2), encoding="utf-8"
        )
        log.debug("Attached %s -> %s", name, path)

    def _file_name(self, name: str, content_type: str) -> str:
        slug = re.sub(r"[^a-z0-9]+", "_", name.lower()).strip("_") or "attachment"
        # Sequence prefix keeps repeated names from overwriting each other.
        return f"{len(self._index):02d}_{slug}{_EXTENSIONS.get(content_type, '.bin')}"
