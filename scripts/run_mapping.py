"""
Run emission factor mapping from CLI.
"""

from __future__ import annotations

from ef_mapping.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
