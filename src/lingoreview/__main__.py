"""Allow running as ``python -m lingoreview``."""

from .cli import main

raise SystemExit(main())
