"""Service layer — registries built on top of the domain layer.

Services may import from domain, schema, and plugins.
They must never import from commands or output.
"""
