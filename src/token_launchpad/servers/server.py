"""
Verification service entry point.

Usage:
    python -m token_launchpad.servers.server
"""

import logging
import os

import uvicorn

from .apps import create_verification_app

DEFAULT_PORT = 3001


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    app = create_verification_app()
    port = int(os.getenv("LAUNCHPAD_VERIFY_PORT", DEFAULT_PORT))
    logging.getLogger(__name__).info(f"Verification server running on port {port}")
    uvicorn.run(app, host="0.0.0.0", port=port)


if __name__ == "__main__":
    main()
