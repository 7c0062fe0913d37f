"""Shared testing utilities for the Google Docs MCP project.

- fakes.py: in-memory backends and document JSON builders
"""
