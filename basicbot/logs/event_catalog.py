"""Message templates for ``BotLogger.log_event``.

Templates live in ``event_templates.json`` next to this module, grouped as
``{domain: {action: template}}``. They are flattened into
``EVENT_TEMPLATES`` keyed by ``(domain, action)`` at import time.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

CATALOG_FILE = "event_templates.json"

EVENT_TEMPLATES: dict[tuple[str, str], str] = {}


def _flatten(raw: Any) -> dict[tuple[str, str], str]:
    if not isinstance(raw, dict):
        raise ValueError("catalog root must be an object")
    return {
        (domain, action): template
        for domain, actions in raw.items()
        if isinstance(actions, dict)
        for action, template in actions.items()
        if isinstance(template, str)
    }


def load_event_templates(path: Path | None = None) -> dict[tuple[str, str], str]:
    """Read and flatten the catalog.

    Never raises: a broken catalog yields a single ``("app", "load_error")``
    entry and every other event falls back to its derived message.
    """
    path = path or Path(__file__).with_name(CATALOG_FILE)
    try:
        return _flatten(json.loads(path.read_text(encoding="utf-8")))
    except FileNotFoundError:
        return {("app", "load_error"): "Event templates file missing"}
    except (OSError, ValueError) as e:
        return {("app", "load_error"): f"Failed to load event templates: {e}"[:200]}


def reload_event_templates() -> None:
    EVENT_TEMPLATES.clear()
    EVENT_TEMPLATES.update(load_event_templates())


def get_template(domain: str, action: str) -> str | None:
    return EVENT_TEMPLATES.get((domain, action))


reload_event_templates()

__all__ = [
    "EVENT_TEMPLATES",
    "get_template",
    "load_event_templates",
    "reload_event_templates",
]
