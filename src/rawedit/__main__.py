from __future__ import annotations

from .editor import main

raise SystemExit(main())
