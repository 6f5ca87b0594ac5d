# =============================================================================
# core/__init__.py
# =============================================================================
# This package contains ALL business logic for the ABN AMRO mortgage tools:
# request validation, the two upstream adapters, the fixed tax facts and the
# guidance prompt text.
#
# ARCHITECTURAL RULE:
#   Nothing in this package imports FastMCP.  The tools/ layer wraps these
#   functions as MCP tools; everything here can be called (and tested)
#   directly.
# =============================================================================
