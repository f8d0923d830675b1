"""
FastMCP server definition for the Mazerion calculators.
"""

from fastmcp import FastMCP

from mcp_mazerion.tools import register_tools

# Create the MCP server
mcp = FastMCP(
    "mcp-mazerion",
    instructions=(
        "Precision brewing and mead calculators. Use list_calculators or "
        "search_calculators_by_name to find a calculator id, then "
        "run_calculation with its parameters."
    ),
)

# Register all tools
register_tools(mcp)
