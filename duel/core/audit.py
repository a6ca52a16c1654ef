from __future__ import annotations

import json
from pathlib import Path
from typing import Any
from datetime import datetime, timezone

from duel.core.config import DEFAULT_LOG_PATH


def append_audit(event: dict[str, Any], path: str = DEFAULT_LOG_PATH) -> None:
    event = dict(event)
    event["ts"] = datetime.now(timezone.utc).replace(tzinfo=None).isoformat() + "Z"
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("a", encoding="utf-8") as f:
        f.write(json.dumps(event, ensure_ascii=False) + "\n")
