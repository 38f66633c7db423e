"""
Entry point for the Rhino LSP server.

Usage:
    python -m rhinolsp.lsp
"""

from .server import start_server

if __name__ == "__main__":
    start_server()
