# ==============================================================================
# JSON File Snapshot Store
# ==============================================================================
"""
SnapshotStore implementation backed by a pretty-printed JSON file.

File layout:
    {
      "<key>": [ ...records... ],
      "lastUpdated": "2024-05-01T12:00:00.000Z"
    }

Saves write a temporary file in the same directory and atomically replace
the target, so readers never see a partially written file. Read and write
failures are logged and never raised: analytics keep working from memory
when the disk is unavailable.
"""

import json
import logging
import os
import tempfile
from pathlib import Path

from storefront.base.snapshot_store import SnapshotStore
from storefront.core.timestamps import to_iso, utc_now

logger = logging.getLogger(__name__)


class JsonSnapshotStore(SnapshotStore):
    """Whole-file JSON snapshot of one list of records."""

    def __init__(self, path: Path | str, key: str):
        """
        Initialize the store.

        Args:
            path: JSON file to read and write
            key: Top-level key holding the record list (e.g. "events")
        """
        self.path = Path(path)
        self.key = key

    def load(self) -> list[dict]:
        """
        Load records from the file.

        Returns:
            Stored records, or an empty list if the file is missing,
            malformed, or lacks the record key
        """
        if not self.path.exists():
            return []

        try:
            with self.path.open("r", encoding="utf-8") as fh:
                data = json.load(fh)
        except (OSError, ValueError) as e:
            logger.warning("Failed to load %s: %s", self.path, e)
            return []

        records = data.get(self.key) if isinstance(data, dict) else None
        if not isinstance(records, list):
            logger.warning("No %s list found in %s, starting empty", self.key, self.path)
            return []

        logger.info("Loaded %d %s from %s", len(records), self.key, self.path)
        return records

    def save(self, records: list[dict]) -> bool:
        """
        Replace the file with the given records and a fresh ``lastUpdated``.

        Args:
            records: Records to persist

        Returns:
            True if the file was written, False if the write failed
        """
        payload = {self.key: records, "lastUpdated": to_iso(utc_now())}
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                delete=False,
            ) as fh:
                tmp_name = fh.name
                json.dump(payload, fh, indent=2, default=str)
            os.replace(tmp_name, self.path)
        except (OSError, TypeError, ValueError) as e:
            logger.error("Failed to save %s to %s: %s", self.key, self.path, e)
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
            return False

        logger.debug("Saved %d %s to %s", len(records), self.key, self.path)
        return True
