from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List

_SEPARATORS_RE = re.compile(r"[\s,]+")

SEPARATOR_KEYS = (",", " ")
BACKSPACE = "Backspace"
ENTER = "Enter"


def split_tags(text: str) -> List[str]:
    """Split on runs of whitespace/commas, uppercase, drop blanks."""

    return [t.strip().upper() for t in _SEPARATORS_RE.split(text or "") if t.strip()]


@dataclass
class TagInput:
    """Tag-style multi-value ticker input.

    `,` and space commit the pending text as tags, Backspace on an empty input
    removes the last tag, Enter asks the caller to submit. Tags are uppercase,
    unique, and kept in first-insertion order.
    """

    tags: List[str] = field(default_factory=list)
    value: str = ""

    def on_change(self, value: str) -> None:
        self.value = (value or "").upper()

    def on_key(self, key: str) -> bool:
        """Apply one key press. Returns True when the key is a submit request."""

        if key in SEPARATOR_KEYS:
            if self.value.strip():
                self.add_tags(self.value)
            return False
        if key == BACKSPACE:
            if self.value == "":
                if self.tags:
                    self.remove_tag(self.tags[-1])
            else:
                self.value = self.value[:-1]
            return False
        if key == ENTER:
            return True
        if len(key) == 1:
            self.value += key.upper()
        return False

    def type_text(self, text: str) -> bool:
        submitted = False
        for ch in text:
            key = ENTER if ch == "\n" else ch
            submitted = self.on_key(key) or submitted
        return submitted

    def add_tags(self, text: str) -> List[str]:
        """Add every new tag found in `text` and clear the input. Returns the added tags."""

        added: List[str] = []
        for tag in split_tags(text):
            if tag not in self.tags and tag not in added:
                added.append(tag)
        self.tags.extend(added)
        self.value = ""
        return added

    def remove_tag(self, tag: str) -> None:
        self.tags = [t for t in self.tags if t != tag]

    def commit_pending(self) -> List[str]:
        """Fold any half-typed text into the tags and return the final list."""

        self.add_tags(self.value)
        return list(self.tags)

    def can_submit(self) -> bool:
        return bool(self.tags) or bool(self.value.strip())
