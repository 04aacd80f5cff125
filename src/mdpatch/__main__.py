"""Allow ``python -m mdpatch``."""

from mdpatch.cli import main

raise SystemExit(main())
