"""Domain models and entities.

Why:
- Pure data structures (Pydantic v2 / dataclasses) live here.
- The domain knows nothing about HTTP, the CLI or SDKs.
"""
