#!/usr/bin/env python3
"""Run the board client from a source checkout without installing the package

Example:
    python scripts/board_client.py --base-url http://localhost:3000 show -o board.html
"""
import sys
from pathlib import Path

# Add backend to path
backend_path = Path(__file__).parent.parent / "webui" / "backend"
sys.path.insert(0, str(backend_path))

from taskboard.client.cli import main  # noqa: E402

if __name__ == "__main__":
    sys.exit(main())
