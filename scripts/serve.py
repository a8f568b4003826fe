#!/usr/bin/env python3
"""Run the Finfly API with uvicorn.

Usage:
    python scripts/serve.py [--host 0.0.0.0] [--port 3001] [--reload]
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Add src to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))

import uvicorn  # noqa: E402


def main() -> int:
    parser = argparse.ArgumentParser(description="Run the Finfly API server")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=3001)
    parser.add_argument("--reload", action="store_true")
    args = parser.parse_args()

    uvicorn.run("finfly.api.app:app", host=args.host, port=args.port, reload=args.reload)
    return 0


if __name__ == "__main__":
    sys.exit(main())
