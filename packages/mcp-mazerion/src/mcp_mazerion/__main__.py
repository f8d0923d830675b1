"""
MCP server entry point for the Mazerion calculators.

Run with: python -m mcp_mazerion
"""

# Suppress Pydantic deprecation warnings BEFORE any imports
import warnings
warnings.filterwarnings("ignore", category=DeprecationWarning)

import logging
import sys

from mcp_mazerion.config import get_config

logger = logging.getLogger("mcp_mazerion")


def main() -> None:
    config = get_config()
    # stdout carries the MCP protocol, so logs go to stderr
    logging.basicConfig(
        stream=sys.stderr,
        level=config.logging_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    from mazerion_core.registry import get_default_registry
    from mcp_mazerion.server import mcp

    # Build the registry before serving so a duplicate id fails at startup
    get_default_registry()

    logger.info("Starting MCP server")
    mcp.run(show_banner=False)
    logger.info("Server exited normally")


if __name__ == "__main__":
    try:
        main()
    except Exception:
        logger.exception("Fatal error starting Mazerion MCP")
        sys.exit(1)
