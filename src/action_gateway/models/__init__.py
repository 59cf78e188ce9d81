"""Data models for the action gateway."""

from .envelope import ActionArguments, ActionData, ActionPayload

__all__ = [
    'ActionArguments',
    'ActionData',
    'ActionPayload',
]
