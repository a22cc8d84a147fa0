"""Persisted user preferences — a small JSON file on disk.

The file holds one object with the fixed keys ``aiProvider``, ``apiKey`` and
``summaryLength``.  Loading never fails: a missing file, an unreadable file,
or a missing key leaves the corresponding default in place.
"""

import json
import logging
from pathlib import Path
from typing import get_args

from docsum.models import LengthClass, Preferences

logger = logging.getLogger(__name__)

_PROVIDER_KEY = "aiProvider"
_API_KEY_KEY = "apiKey"
_LENGTH_KEY = "summaryLength"


class PreferenceStore:
    """Load and save ``Preferences`` at a fixed path."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def load(self) -> Preferences:
        """Return stored preferences merged over the defaults.

        Empty values are treated as missing.  An unknown length class is
        ignored with a warning.
        """
        prefs = Preferences()
        stored = self._read()
        if not stored:
            return prefs

        updates: dict = {}
        provider = stored.get(_PROVIDER_KEY)
        if isinstance(provider, str) and provider:
            updates["provider"] = provider
        api_key = stored.get(_API_KEY_KEY)
        if isinstance(api_key, str) and api_key:
            updates["api_key"] = api_key
        length = stored.get(_LENGTH_KEY)
        if isinstance(length, str) and length:
            if length in get_args(LengthClass):
                updates["length"] = length
            else:
                logger.warning("Ignoring unknown stored summary length: %r", length)

        return prefs.model_copy(update=updates)

    def save(self, prefs: Preferences) -> None:
        """Write all three preferences, replacing the previous file."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = prefs.model_dump(by_alias=True)
        self.path.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
        logger.debug("Preferences saved to %s", self.path)

    def _read(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Could not read preferences from %s: %s", self.path, exc)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring malformed preferences file: %s", self.path)
            return {}
        return data
