"""MCP (Model Context Protocol) server module for VRT journey search.

This module provides MCP server implementation that exposes journey search
through the Model Context Protocol.
"""

from .server import JourneyMCPServer, main

__all__ = ["JourneyMCPServer", "main"]
