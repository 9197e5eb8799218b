from __future__ import annotations

import json
import logging
import uuid
from dataclasses import replace
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import numpy as np

from .token import ColorToken

log = logging.getLogger(__name__)


class Palette:
    """
    Keyed collection of tokens with an optional selection.

    ``current`` is the selected token, or ``default_color`` when nothing is
    selected; ``replace_current`` writes back to whichever one that is.
    """

    def __init__(
        self,
        colors: Optional[List[ColorToken]] = None,
        default_color: Optional[ColorToken] = None,
    ) -> None:
        self.colors: Dict[uuid.UUID, ColorToken] = {c.id: c for c in colors or []}
        self.selected: Optional[uuid.UUID] = None
        self.default_color = default_color or ColorToken.from_hsb(0.5, 0.5, 0.5)

    def __len__(self) -> int:
        return len(self.colors)

    def __contains__(self, key: object) -> bool:
        return key in self.colors

    @property
    def current(self) -> ColorToken:
        if self.selected is None:
            return self.default_color
        return self.colors[self.selected]

    def replace_current(self, token: ColorToken) -> None:
        if self.selected is None:
            self.default_color = token
        else:
            # the selected key owns identity; keep the stored token under it
            old = self.colors[self.selected]
            self.colors[self.selected] = replace(
                token, id=old.id, date_created=old.date_created
            )

    def add(self, token: Optional[ColorToken] = None) -> uuid.UUID:
        token = token or ColorToken.copy_of(self.current)
        if token.id in self.colors:
            raise ValueError(f"color {token.id} is already in the palette")
        self.colors[token.id] = token
        log.debug("palette add %s (%s)", token.id, token.name)
        return token.id

    def delete(self, key: Optional[uuid.UUID] = None) -> ColorToken:
        key = key if key is not None else self.selected
        if key is None:
            raise KeyError("no color selected")
        token = self.colors.pop(key)
        if self.selected == key:
            self.selected = None
        log.debug("palette delete %s", key)
        return token

    def select(self, key: uuid.UUID) -> None:
        """Select ``key``, or clear the selection if it is already selected."""
        if key not in self.colors:
            raise KeyError(key)
        self.selected = None if self.selected == key else key

    def sorted_colors(self) -> List[ColorToken]:
        return sorted(self.colors.values(), key=lambda c: c.date_created, reverse=True)

    def to_array(self) -> np.ndarray:
        """(N, 4) float RGBA rows, newest first."""
        rows = [c.rgba for c in self.sorted_colors()]
        return np.asarray(rows, dtype=np.float64).reshape(len(rows), 4)

    # ---- persistence ----

    def to_dict(self) -> Dict[str, Any]:
        return {
            "colors": [c.to_dict() for c in self.sorted_colors()],
            "selected": str(self.selected) if self.selected is not None else None,
            "default_color": self.default_color.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Palette:
        default = data.get("default_color")
        palette = cls(
            [ColorToken.from_dict(c) for c in data.get("colors", [])],
            ColorToken.from_dict(default) if default else None,
        )
        selected = data.get("selected")
        if selected:
            key = uuid.UUID(selected)
            if key not in palette.colors:
                raise ValueError(f"selected color {key} is not in the palette")
            palette.selected = key
        return palette

    def save(self, path: str | Path) -> None:
        Path(path).write_text(json.dumps(self.to_dict(), indent=2), encoding="utf-8")
        log.info("saved %d colors to %s", len(self), path)

    @classmethod
    def load(cls, path: str | Path) -> Palette:
        return cls.from_dict(json.loads(Path(path).read_text(encoding="utf-8")))


__all__ = ["Palette"]
