"""Allow ``python -m sbomgate run-scan|analyze-results ...``."""

from __future__ import annotations

import sys

from sbomgate.cli import main

if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
