import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

DEFAULT_SESSION_PATH = Path.home() / ".cafedocs" / "session.json"


class SessionStore:
    """Local persistence of the signed-in user and token"""

    def __init__(self, path: Optional[os.PathLike] = None):
        self.path = Path(path) if path else DEFAULT_SESSION_PATH

    def save(self, user: Dict[str, Any], token: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps({"user": user, "token": token}), encoding="utf-8")

    def load(self) -> Optional[Dict[str, Any]]:
        """Stored session, or None when absent or unreadable"""
        if not self.path.exists():
            return None
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            return None
        if not isinstance(data, dict) or "user" not in data or "token" not in data:
            return None
        return data

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)
