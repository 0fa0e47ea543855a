"""
Prompt keybindings.

Maps the prompt's logical actions to key descriptors.  Only non-printable
keys are bound by default so that every letter stays searchable text.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from checkbox_search.logging import get_logger
from checkbox_search.tui.keys import Key

logger = get_logger("keybindings")

DEFAULT_KEYBINDINGS: dict[str, list[str]] = {
    "up": ["up"],
    "down": ["down"],
    "toggle": ["tab"],
    "submit": ["enter", "return"],
    "clear_search": ["escape"],
}


def _normalise_key_descriptor(descriptor: str) -> str:
    """
    Normalise a human-readable key descriptor to a canonical form.

    ``"Shift+Tab"`` -> ``"shift+tab"``
    """
    parts = [p.strip().lower() for p in descriptor.split("+")]
    modifiers = sorted(parts[:-1])
    return "+".join(modifiers + [parts[-1]])


def _key_to_descriptor(key: Key) -> str:
    """
    Canonical descriptor of a :class:`Key`.

    >>> _key_to_descriptor(Key(name="tab", shift=True))
    'shift+tab'
    """
    modifiers = []
    if key.alt:
        modifiers.append("alt")
    if key.ctrl:
        modifiers.append("ctrl")
    if key.shift:
        modifiers.append("shift")

    # "ctrl+c" style names already carry their modifiers
    base = key.name.rsplit("+", 1)[-1] if len(key.name) > 1 else key.name
    return "+".join(modifiers + [base.lower() if len(base) > 1 else base])


class KeybindingsManager:
    """
    Resolves keys to prompt actions.

    Parameters
    ----------
    user_overrides:
        Optional mapping of action names to key descriptor lists that
        replace the defaults for those actions.
    """

    def __init__(self, user_overrides: dict[str, list[str]] | None = None) -> None:
        self._bindings: dict[str, list[str]] = dict(DEFAULT_KEYBINDINGS)
        if user_overrides:
            self._bindings.update(user_overrides)

        self._normalised: dict[str, list[str]] = {
            action: [_normalise_key_descriptor(d) for d in descriptors]
            for action, descriptors in self._bindings.items()
        }

    @classmethod
    def load(cls, config_path: str | Path) -> KeybindingsManager:
        """
        Load overrides from a JSON file mapping actions to descriptor lists::

            {"toggle": ["tab", "space"]}

        A missing or malformed file yields the defaults.
        """
        path = Path(config_path)
        overrides: dict[str, list[str]] | None = None

        if path.is_file():
            try:
                raw: Any = json.loads(path.read_text(encoding="utf-8"))
            except (json.JSONDecodeError, OSError) as exc:
                logger.warning("Ignoring keybindings file %s: %s", path, exc)
                raw = None
            if isinstance(raw, dict):
                overrides = {
                    action: keys
                    for action, keys in raw.items()
                    if isinstance(keys, list) and all(isinstance(k, str) for k in keys)
                }

        return cls(user_overrides=overrides)

    def matches(self, key: Key | str, action: str) -> bool:
        """Test whether *key* is bound to *action*."""
        descriptors = self._normalised.get(action)
        if descriptors is None:
            return False

        if isinstance(key, str):
            normalised = _normalise_key_descriptor(key)
        else:
            normalised = _key_to_descriptor(key)

        return normalised in descriptors

    def get_keys(self, action: str) -> list[str]:
        """Descriptors bound to *action*, in their original form."""
        return list(self._bindings.get(action, []))

    def actions(self) -> list[str]:
        return list(self._bindings.keys())

    def find_action(self, key: Key | str) -> str | None:
        """First action bound to *key*, checked in insertion order."""
        for action in self._bindings:
            if self.matches(key, action):
                return action
        return None
