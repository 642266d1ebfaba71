"""Domain layer — the command contract, discovery, and definition records.

This layer depends only on stdlib, pydantic, and click's exception types.
It must never import from services, plugins, commands, config, or output.
"""
