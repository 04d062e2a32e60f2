"""
Line-delimited JSON record store.

Each collection lives in ``<data_dir>/<name>.jsonl`` with one JSON object per
line. Full rewrites go through a temporary file that is renamed over the
target so a failed write never truncates existing data.
"""

import json
import logging
import os
import tempfile
from collections.abc import Sequence
from pathlib import Path

from aeroprod.domain.production.repositories.record_store import Record, RecordStore

logger = logging.getLogger(__name__)

FILE_SUFFIX = ".jsonl"


class JsonLinesStore(RecordStore):
    def __init__(self, data_dir: Path) -> None:
        self._data_dir = Path(data_dir)
        self._skipped: dict[str, int] = {}

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    @property
    def skipped_records(self) -> dict[str, int]:
        return dict(self._skipped)

    def path_for(self, name: str) -> Path:
        return self._data_dir / f"{name}{FILE_SUFFIX}"

    def ensure_data_dir(self) -> None:
        self._data_dir.mkdir(parents=True, exist_ok=True)

    def load_all(self, name: str) -> list[Record] | None:
        path = self.path_for(name)
        if not path.exists():
            self._skipped[name] = 0
            return None

        records: list[Record] = []
        skipped = 0
        # Decoded per line: an invalid byte sequence skips only its own line
        with path.open("rb") as fh:
            for line_no, raw in enumerate(fh, start=1):
                raw = raw.strip()
                if not raw:
                    continue
                try:
                    record = json.loads(raw.decode("utf-8"))
                except (ValueError, RecursionError) as e:
                    logger.warning("Skipping malformed line %d in %s: %s", line_no, path, e)
                    skipped += 1
                    continue
                if not isinstance(record, dict):
                    logger.warning("Skipping non-object line %d in %s", line_no, path)
                    skipped += 1
                    continue
                records.append(record)

        self._skipped[name] = skipped
        logger.debug("Loaded %d records from %s (%d skipped)", len(records), path, skipped)
        return records

    def append_one(self, name: str, record: Record) -> None:
        self.ensure_data_dir()
        path = self.path_for(name)
        line = json.dumps(record, ensure_ascii=False)
        with path.open("a", encoding="utf-8") as fh:
            fh.write(line + "\n")
            fh.flush()
            os.fsync(fh.fileno())

    def replace_all(self, name: str, records: Sequence[Record]) -> None:
        self.ensure_data_dir()
        path = self.path_for(name)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{name}.", suffix=".tmp", dir=self._data_dir
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                for record in records:
                    fh.write(json.dumps(record, ensure_ascii=False) + "\n")
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
