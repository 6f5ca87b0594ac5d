# =============================================================================
# core/errors.py  -  Adapter-level error taxonomy
# =============================================================================
#
# Every network adapter raises one of these while it runs.  None of them ever
# leaves a tool invocation: the adapters catch them (together with pydantic's
# ValidationError) and fold them into a failed ToolResult.
#
#   MortgageToolError
#     ├── UpstreamHttpError   non-2xx response, carries status + body text
#     ├── TransportError      the upstream could not be reached at all
#     └── ParseError          the upstream answered with something not JSON
# =============================================================================


class MortgageToolError(Exception):
    """Base class for failures raised inside a tool adapter."""


class UpstreamHttpError(MortgageToolError):
    """The ABN AMRO service answered with a non-2xx status."""

    def __init__(self, status_code: int, body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(f"ABN AMRO API error ({status_code}): {body}")


class TransportError(MortgageToolError):
    """The request never got a response (DNS, connect, read...)."""


class ParseError(MortgageToolError):
    """The response body could not be read as a JSON object."""
