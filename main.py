# =============================================================================
# main.py  -  Entry Point for the ABN AMRO mortgage MCP server
# =============================================================================
#
# HOW TO RUN:
#   uv run python main.py
#   (or, once installed: abn-amro-mcp-server)
#
# WHAT HAPPENS:
#   1. Loads environment variables from .env (endpoint overrides, LOG_LEVEL,
#      MCP_TRANSPORT)
#   2. Imports the FastMCP server, which registers all tools and the prompt
#   3. Serves MCP over stdio until the client disconnects
# =============================================================================

from dotenv import load_dotenv


def main() -> None:
    # .env must be loaded BEFORE the server module is imported: logging is
    # configured at import time from LOG_LEVEL.
    load_dotenv()

    from tools.mcp_server import run

    run()


if __name__ == "__main__":
    main()
