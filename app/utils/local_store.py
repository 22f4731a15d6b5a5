# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the DAMit! - Daily Accountability project.
# Licensed under the MIT License - see the LICENSE file for details.

import json
import logging
import os
import threading
from pathlib import Path
from typing import Dict, Optional

logger = logging.getLogger(__name__)

DEFAULT_STORE_PATH = "./data/local_store.json"

# Well-known keys
NOTIFICATION_SETTINGS_KEY = "damit-notification-settings"
LAST_NOTIFICATION_DATE_KEY = "damit-last-notification-date"
NOTIFICATION_PERMISSION_KEY = "damit-notification-permission"
DEVICE_TOKEN_KEY = "damit-device-token"
EMOJI_AVATAR_KEY_PREFIX = "damit-emoji-avatar-"


class LocalStore:
    """
    Device-local key -> string store, persisted as one JSON file.

    Every ``set``/``remove`` rewrites the file so the state survives restarts.
    """

    def __init__(self, path: Optional[str] = None):
        self.path = Path(path or os.environ.get("DAMIT_LOCAL_STORE", DEFAULT_STORE_PATH))
        self._lock = threading.Lock()
        self._data: Dict[str, str] = self._load()

    def _load(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(f"⚠️ Local store at {self.path} unreadable, starting empty: {e}")
            return {}
        if not isinstance(raw, dict):
            return {}
        return {str(k): str(v) for k, v in raw.items()}

    def _flush(self, data: Dict[str, str]):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(".tmp")
        tmp_path.write_text(json.dumps(data, indent=2, sort_keys=True), encoding="utf-8")
        os.replace(tmp_path, self.path)

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._data.get(key)

    def set(self, key: str, value: str):
        with self._lock:
            # Memory only changes once the file write has succeeded
            updated = dict(self._data)
            updated[key] = value
            self._flush(updated)
            self._data = updated

    def remove(self, key: str):
        with self._lock:
            if key not in self._data:
                return
            updated = {k: v for k, v in self._data.items() if k != key}
            self._flush(updated)
            self._data = updated


def emoji_avatar_key(user_id) -> str:
    return f"{EMOJI_AVATAR_KEY_PREFIX}{user_id}"
