"""
Async client for the Kupo chain indexer HTTP API.

The client wraps a fixed set of read-only Kupo endpoints (matches, metadata,
patterns, scripts, datums) and decodes their JSON into typed records. See
DESIGN.md for full details.
"""

__all__ = ["config", "kupo_api", "logging_config"]
