"""
Rhino Language Server Protocol implementation.

Provides IDE features for Rhino test files:
- Action snippet completion
- CLI parameter completion
- Section annotation completion
"""

from .server import start_server

__all__ = ["start_server"]
