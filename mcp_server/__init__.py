"""MCP transport for DevSync."""
