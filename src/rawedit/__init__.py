"""rawedit: a small modeless editor for VT100-compatible terminals."""

from __future__ import annotations

from .constants import RAWEDIT_VERSION as __version__
from .editor import Editor, main
from .models import Row, Session

__all__ = ["Editor", "Row", "Session", "main", "__version__"]
