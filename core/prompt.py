# =============================================================================
# core/prompt.py  -  The "mortgage-guidance" prompt template
# =============================================================================
#
# The server publishes one MCP prompt.  The client fills in a single free-text
# field and gets back a ready-made user message that steers the model towards
# the mortgage tools.  Pure string templating: no I/O, no validation beyond
# the field being text.
# =============================================================================

MORTGAGE_GUIDANCE_TEMPLATE = (
    "Please help me with ABN AMRO mortgage calculations and interest rates. "
    "Additional context: {message}"
)


def render_mortgage_guidance(message: str) -> str:
    """Fill the guidance template with the caller's context."""
    return MORTGAGE_GUIDANCE_TEMPLATE.format(message=message)
