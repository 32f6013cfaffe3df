"""Integrations with external services."""

from .ticktick import Transport

__all__ = ["Transport"]
