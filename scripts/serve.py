#!/usr/bin/env python3
"""Run the Notely API under uvicorn on the configured port.

Usage:
    python scripts/serve.py
    python scripts/serve.py --host 0.0.0.0 --reload
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Ensure project root is on path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import uvicorn

from config.settings import get_settings


def main() -> None:
    parser = argparse.ArgumentParser(description="Run the Notely API server")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=None, help="Defaults to PORT from settings")
    parser.add_argument("--reload", action="store_true")
    args = parser.parse_args()

    settings = get_settings()
    uvicorn.run(
        "notely.api.main:create_app",
        factory=True,
        host=args.host,
        port=args.port or settings.port,
        reload=args.reload,
    )


if __name__ == "__main__":
    main()
