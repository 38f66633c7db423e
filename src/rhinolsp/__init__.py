"""
rhinolsp - autocomplete for the Rhino test-automation DSL.

Turns a catalog of action manifests into snippet completions and
decides, from the cursor position, which completions apply.
"""

from rhinolsp._version import get_version

__version__ = get_version()

__all__ = ["__version__", "get_version"]
