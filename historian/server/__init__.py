"""MCP server wiring for the Historian.

``historian.server.main`` adapts the capability registry to the MCP stdio
transport; ``historian.server.core.config`` holds the settings model.
"""
