# =============================================================================
# tools/__init__.py
# =============================================================================
# This package contains the FastMCP tool wrappers.
#
# ARCHITECTURAL ROLE:
#   tools/ is the translation layer between the MCP protocol and core/.
#   Each tool:
#     1. Declares typed, described parameters (FastMCP publishes the schema)
#     2. Forwards the arguments to a core/ function
#     3. Serializes the returned ToolResult envelope as JSON text
#
# WHAT TOOLS DO NOT DO:
#   - They do NOT contain business logic (that's in core/)
#   - They do NOT talk HTTP themselves (core/upstream.py does)
# =============================================================================
