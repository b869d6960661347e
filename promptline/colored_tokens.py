"""Styled text tokens rendered to ANSI escape sequences."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


RESET = "\033[0m"


class Color(Enum):
    """Foreground colors, valued by their SGR code."""
    RED = 31
    GREEN = 32
    YELLOW = 33
    BLUE = 34
    CYAN = 36


@dataclass(frozen=True)
class Token:
    """A run of text with an optional color and weight."""
    text: str
    color: Optional[Color] = None
    bold: bool = False

    def render(self, enable_color: bool = True) -> str:
        if not enable_color or (self.color is None and not self.bold):
            return self.text
        codes = []
        if self.bold:
            codes.append("1")
        if self.color is not None:
            codes.append(str(self.color.value))
        return f"\033[{';'.join(codes)}m{self.text}{RESET}"


@dataclass(frozen=True)
class TokenSeq:
    """Ordered tokens joined with no separator."""
    items: tuple[Token, ...] = ()

    def __iter__(self):
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def append(self, token: Token) -> TokenSeq:
        return TokenSeq(self.items + (token,))

    @property
    def plain(self) -> str:
        """Text of all tokens without styling."""
        return "".join(token.text for token in self.items)

    def render(self, enable_color: bool = True) -> str:
        return "".join(token.render(enable_color) for token in self.items)
