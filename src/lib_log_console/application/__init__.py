"""Application layer: severity gating, name resolution, and progress reporting."""

from __future__ import annotations

from .filter import Filter
from .progress import Progress
from .resolver import RESOLVER, Resolver

__all__ = ["Filter", "Progress", "RESOLVER", "Resolver"]
