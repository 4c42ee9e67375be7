"""Client-side session storage (the token, user and user type kept between calls)."""

import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

TOKEN_KEY = "authToken"
USER_KEY = "user"
USER_TYPE_KEY = "userType"
SESSION_KEYS = (TOKEN_KEY, USER_KEY, USER_TYPE_KEY)


class MemorySessionStore:
    """In-process key/value store; the default for scripts and tests."""

    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)


class FileSessionStore(MemorySessionStore):
    """
    JSON file backed store so a CLI session survives between runs.

    The file is rewritten on every change; a missing or corrupt file starts an
    empty session.
    """

    def __init__(self, path: str | Path) -> None:
        super().__init__()
        self.path = Path(path)
        if self.path.exists():
            try:
                data = json.loads(self.path.read_text(encoding="utf-8"))
            except (OSError, json.JSONDecodeError) as e:
                logger.warning("Ignoring unreadable session file %s: %s", self.path, e)
                data = {}
            if isinstance(data, dict):
                self._data = {str(k): str(v) for k, v in data.items()}

    def _save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(self._data), encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        super().set(key, value)
        self._save()

    def remove(self, key: str) -> None:
        super().remove(key)
        self._save()
