from __future__ import annotations

from collections import OrderedDict
from typing import Iterable

import pygame

from .surface import Color


def load_font(preferred_names: Iterable[str], size: int, *, bold: bool = False) -> pygame.font.Font:
    """First installed font from *preferred_names*, else pygame's default."""

    names = [name for name in preferred_names if name]
    for name in names:
        path = pygame.font.match_font(name, bold=bold)
        if path:
            return pygame.font.Font(path, size)
    font = pygame.font.Font(None, size)
    font.set_bold(bold)
    return font


class FontLibrary:
    """Fonts keyed by pixel size and weight, plus an LRU of rendered labels."""

    def __init__(self, preferred_names: Iterable[str], *, text_cache_size: int = 256) -> None:
        self._names = tuple(preferred_names)
        self._fonts: dict[tuple[int, bool], pygame.font.Font] = {}
        self._labels: OrderedDict[tuple[str, Color, int, bool], pygame.Surface] = OrderedDict()
        self._label_limit = max(1, text_cache_size)

    @property
    def preferred_names(self) -> tuple[str, ...]:
        return self._names

    def get(self, size: int, *, bold: bool = False) -> pygame.font.Font:
        if size <= 0:
            raise ValueError("Font size must be positive")
        key = (size, bold)
        font = self._fonts.get(key)
        if font is None:
            font = load_font(self._names, size, bold=bold)
            self._fonts[key] = font
        return font

    def render(self, text: str, color: Color, *, size: int, bold: bool = False) -> pygame.Surface:
        key = (text, tuple(color), size, bold)
        label = self._labels.get(key)
        if label is not None:
            self._labels.move_to_end(key)
            return label
        label = self.get(size, bold=bold).render(text, True, color)
        self._labels[key] = label
        while len(self._labels) > self._label_limit:
            self._labels.popitem(last=False)
        return label

    def cached_labels(self) -> int:
        return len(self._labels)


__all__ = ["FontLibrary", "load_font"]
