"""
MCP Server for DevSync.

Exposes account, connection and feed operations as tools. Every tool except
auth_register, auth_login and health requires a session token.

Run with: python -m mcp_server.server
Or: devsync-server --transport streamable-http --port 8000
"""
import argparse
import logging
import sys
from pathlib import Path

# Add parent directory to path for imports
project_root = str(Path(__file__).resolve().parent.parent)
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from mcp.server import FastMCP

from devsync.database import init_db
from devsync.logging_setup import init_logging
from mcp_server.tools import register_all_tools

logger = logging.getLogger(__name__)

# Initialize the MCP server using FastMCP (has .tool() decorator)
server = FastMCP("devsync")

# Register all tools
register_all_tools(server)


def main(argv=None):
    """Entry point for script installation."""
    parser = argparse.ArgumentParser(description="DevSync MCP server")
    parser.add_argument(
        "--transport",
        choices=["stdio", "streamable-http", "sse"],
        default="stdio",
        help="Transport to serve on (default: stdio)",
    )
    parser.add_argument("--host", default=None, help="Bind host for HTTP transports")
    parser.add_argument("--port", type=int, default=None, help="Bind port for HTTP transports")
    args = parser.parse_args(argv)

    init_logging()

    # Tables must exist before accepting requests
    init_db()

    if args.host:
        server.settings.host = args.host
    if args.port:
        server.settings.port = args.port

    logger.info("Starting DevSync server on %s transport", args.transport)
    server.run(transport=args.transport)


if __name__ == "__main__":
    main()
