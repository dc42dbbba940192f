from __future__ import annotations

from .local import CAMERAS_FILE, CREDENTIALS_FILE, LocalStore, seed_cameras

__all__ = ["CAMERAS_FILE", "CREDENTIALS_FILE", "LocalStore", "seed_cameras"]
