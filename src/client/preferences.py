"""Client preferences persisted between sessions."""
import json
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

DARK_MODE_KEY = "darkMode"


def get_default_preferences_path() -> Path:
    """Get the preferences file location from environment."""
    configured = os.getenv("BOOKMARKS_PREFERENCES_PATH")
    if configured:
        return Path(configured)
    return Path.home() / ".bookmarks" / "preferences.json"


class Preferences:
    """
    Small JSON-file backed key/value store for UI preferences.

    A missing or unreadable file behaves as empty; values are written through
    on every change.
    """

    def __init__(self, path: Path | None = None) -> None:
        self.path = path or get_default_preferences_path()

    def _load(self) -> dict:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, ValueError):
            logger.warning("preferences_unreadable", extra={"path": str(self.path)})
            return {}
        return data if isinstance(data, dict) else {}

    def _save(self, data: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data), encoding="utf-8")

    @property
    def dark_mode(self) -> bool:
        """Whether dark mode is on. Defaults to False."""
        return self._load().get(DARK_MODE_KEY) is True

    @dark_mode.setter
    def dark_mode(self, enabled: bool) -> None:
        data = self._load()
        data[DARK_MODE_KEY] = bool(enabled)
        self._save(data)
