"""Provide the public `kanban_board` package exports."""

from __future__ import annotations

from .board import BoardSession, open_session

__all__ = ["BoardSession", "open_session"]
