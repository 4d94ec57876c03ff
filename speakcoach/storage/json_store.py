"""
JSON file repository
One file per record: <root>/<collection>/<record_id>.json
"""
import json
import logging
import re
import threading
from pathlib import Path
from typing import List, Optional

from speakcoach.storage.base import Repository

logger = logging.getLogger(__name__)

_SAFE_NAME = re.compile(r"[A-Za-z0-9_-]+")


class JsonFileRepository(Repository):
    """Stores records as pretty-printed JSON files, written atomically"""

    def __init__(self, root: Path):
        self.root = Path(root)
        self.root.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()
        logger.info(f"[Storage] JSON repository at {self.root}")

    def _path(self, collection: str, record_id: str) -> Path:
        if not _SAFE_NAME.fullmatch(collection) or not _SAFE_NAME.fullmatch(record_id):
            raise ValueError(f"invalid record key: {collection}/{record_id}")
        return self.root / collection / f"{record_id}.json"

    def save(self, collection: str, record_id: str, data: dict) -> None:
        """Atomic write: temp file then replace"""
        path = self._path(collection, record_id)
        with self._lock:
            path.parent.mkdir(parents=True, exist_ok=True)
            temp_file = path.with_suffix(".tmp")
            temp_file.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
            temp_file.replace(path)

    def get(self, collection: str, record_id: str) -> Optional[dict]:
        # ids arrive from URLs; a malformed one cannot name a stored record
        if not _SAFE_NAME.fullmatch(record_id):
            return None
        path = self._path(collection, record_id)
        if not path.exists():
            return None
        return self._read(path)

    def list(self, collection: str) -> List[dict]:
        directory = self.root / collection
        if not directory.exists():
            return []
        records = (self._read(path) for path in sorted(directory.glob("*.json")))
        return [record for record in records if record is not None]

    @staticmethod
    def _read(path: Path) -> Optional[dict]:
        """Parse one record file; unreadable files count as missing"""
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            logger.warning(f"[Storage] skipping unreadable record {path}: {e}")
            return None

    def delete(self, collection: str, record_id: str) -> bool:
        path = self._path(collection, record_id)
        with self._lock:
            if not path.exists():
                return False
            path.unlink()
            return True
