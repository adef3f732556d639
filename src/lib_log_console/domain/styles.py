"""Style value object consumed by terminal adapters.

A :class:`Style` is the ordered, deduplicated set of tokens a terminal turns
into a single escape sequence: one foreground colour, an optional background
colour, and any number of attribute tokens. Being frozen and hashable, equal
styles share one cache slot in the terminal encoder.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class Style:
    """Symbolic style descriptor.

    Examples
    --------
    >>> Style.from_tokens("blue", None, "underline", "bold", "underline")
    Style(foreground='blue', background=None, attributes=('underline', 'bold'))
    >>> Style.from_tokens() == Style()
    True
    """

    foreground: str | None = None
    background: str | None = None
    attributes: tuple[str, ...] = ()

    @classmethod
    def from_tokens(cls, foreground: str | None = None, background: str | None = None, *attributes: str | None) -> "Style":
        """Build a style, dropping ``None`` slots and repeated attributes."""

        seen: dict[str, None] = {}
        for token in attributes:
            if token is not None:
                seen.setdefault(token, None)
        return cls(foreground=foreground, background=background, attributes=tuple(seen))

    @property
    def is_empty(self) -> bool:
        return self.foreground is None and self.background is None and not self.attributes


__all__ = ["Style"]
