from __future__ import annotations

from .gist import GistClient

__all__ = ["GistClient"]
