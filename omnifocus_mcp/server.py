"""FastMCP server initialization for OmniFocus MCP."""

from mcp.server.fastmcp import FastMCP

from omnifocus_mcp.config import get_settings
from omnifocus_mcp.log import configure_logging

# Initialize the MCP server
mcp = FastMCP("omnifocus_mcp")


def run() -> None:
    """Run the MCP server over stdio."""
    configure_logging(get_settings().log_level)

    # Importing the tools registers them with the server
    import omnifocus_mcp.tools  # noqa: F401

    mcp.run()

