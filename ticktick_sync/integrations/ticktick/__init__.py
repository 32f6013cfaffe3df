"""TickTick / Dida365 HTTP integration."""

from .transport import Transport

__all__ = ["Transport"]
