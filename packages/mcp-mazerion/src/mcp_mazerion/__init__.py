"""
mcp-mazerion: MCP server exposing the Mazerion calculators.
"""

__version__ = "0.1.0"
