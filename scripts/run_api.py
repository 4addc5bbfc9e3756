#!/usr/bin/env python3
"""
Run the checkout API with uvicorn on $PORT (default 5000).

  python scripts/run_api.py
  python scripts/run_api.py --reload
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import uvicorn

sys.path.insert(0, str(Path(__file__).parent.parent))

from src.utils.config_loader import load_settings  # noqa: E402

logger = logging.getLogger(__name__)


def main() -> int:
    settings = load_settings()
    parser = argparse.ArgumentParser(description="Run the checkout payment API")
    parser.add_argument("--host", default="0.0.0.0", help="Bind address")
    parser.add_argument("--port", type=int, default=settings.port, help="Port (defaults to $PORT)")
    parser.add_argument("--reload", action="store_true", help="Reload on code changes")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    logger.info("Server running on port %s", args.port)
    logger.info("Health check: http://localhost:%s/health", args.port)
    logger.info("API documentation: http://localhost:%s/", args.port)
    uvicorn.run("src.api.main:app", host=args.host, port=args.port, reload=args.reload)
    return 0


if __name__ == "__main__":
    sys.exit(main())
