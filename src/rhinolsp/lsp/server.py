"""
Rhino Language Server implementation using pygls.

Serves completions for Rhino test files from the catalog configured in the
workspace's ``rhino.toml``.
"""

import logging
from pathlib import Path
from typing import Any, List, Optional

from pygls.lsp.server import LanguageServer
from pygls.uris import to_fs_path

from lsprotocol.types import (
    INITIALIZE,
    TEXT_DOCUMENT_COMPLETION,
    CompletionItem,
    CompletionItemKind,
    CompletionList,
    CompletionOptions,
    CompletionParams,
    InitializeParams,
    InsertTextFormat,
    MarkupContent,
    MarkupKind,
)

from rhinolsp._version import get_version
from rhinolsp.completion import CandidateKind, CompletionCandidate, CompletionDispatcher, RequestKind
from rhinolsp.core.catalog import load_catalog
from rhinolsp.core.config import ProjectConfig, find_config
from rhinolsp.core.errors import RhinoLspError

# Set up logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

TRIGGER_CHARACTERS = ["-", "[", "$", "{", "@"]
REFRESH_CATALOG_COMMAND = "rhino.refreshCatalog"

_ITEM_KINDS = {
    CandidateKind.ACTION: CompletionItemKind.Method,
    CandidateKind.PARAMETER: CompletionItemKind.Variable,
    CandidateKind.ANNOTATION: CompletionItemKind.Property,
    CandidateKind.MACRO: CompletionItemKind.Function,
    CandidateKind.ASSERTION: CompletionItemKind.Method,
    CandidateKind.ASSERTION_METHOD: CompletionItemKind.Variable,
    CandidateKind.TEST_PARAMETER: CompletionItemKind.Property,
}

# kinds whose documentation is Markdown
_MARKDOWN_KINDS = {CandidateKind.ACTION, CandidateKind.ASSERTION, CandidateKind.TEST_PARAMETER}


class RhinoLanguageServer(LanguageServer):
    """Language server holding the workspace config and its completion dispatcher."""

    def __init__(self, *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self.workspace_root: Optional[Path] = None
        self.config: Optional[ProjectConfig] = None
        self.dispatcher = CompletionDispatcher()


# Create server instance
server = RhinoLanguageServer("rhino-lsp", f"v{get_version()}")


@server.feature(INITIALIZE)
def initialize(ls: RhinoLanguageServer, params: InitializeParams):
    """Initialize the language server."""
    root_uri = params.root_uri
    if not root_uri and params.workspace_folders:
        root_uri = params.workspace_folders[0].uri

    if root_uri:
        ls.workspace_root = Path(to_fs_path(root_uri) or root_uri)
        logger.info(f"Workspace root: {ls.workspace_root}")

        try:
            _load_workspace(ls)
        except RhinoLspError as e:
            logger.error(f"Failed to load workspace: {e}")


def _load_workspace(ls: RhinoLanguageServer):
    """Read rhino.toml and the catalog it points at."""
    if not ls.workspace_root:
        return

    ls.config = find_config(ls.workspace_root)
    logging.getLogger("rhinolsp").setLevel(ls.config.lsp.log_level)

    catalog = load_catalog(ls.config.catalog_dir)
    ls.dispatcher = CompletionDispatcher(catalog, ls.config.completion)
    logger.info(f"Loaded {len(catalog.manifests)} actions from {ls.config.catalog_dir}")


@server.command(REFRESH_CATALOG_COMMAND)
def refresh_catalog(ls: RhinoLanguageServer, *args: Any) -> bool:
    """Reload config and catalog from disk."""
    try:
        _load_workspace(ls)
    except RhinoLspError as e:
        logger.error(f"Error reloading catalog: {e}")
        return False
    return True


@server.feature(TEXT_DOCUMENT_COMPLETION, CompletionOptions(trigger_characters=TRIGGER_CHARACTERS))
def completion(ls: RhinoLanguageServer, params: CompletionParams) -> Optional[CompletionList]:
    """Provide completion suggestions."""
    document = ls.workspace.get_text_document(params.text_document.uri)
    line, column = params.position.line, params.position.character

    lines = document.source.split("\n")
    prefix = lines[line][:column] if line < len(lines) else ""
    trigger = params.context.trigger_character if params.context else None

    kind = _request_kind(trigger, prefix)
    candidates = ls.dispatcher.complete(document.source, line, column, kind)

    items: List[CompletionItem] = [_to_completion_item(c) for c in candidates]
    return CompletionList(is_incomplete=False, items=items)


# Helper functions


def _request_kind(trigger: Optional[str], prefix: str) -> RequestKind:
    """Map the trigger character (or the text before the cursor) to a request path."""
    if trigger == "[" or prefix == "[":
        return RequestKind.ANNOTATION
    if trigger == "-" or prefix.endswith("--"):
        return RequestKind.PARAMETER
    if trigger == "$" or prefix.endswith("{{$"):
        return RequestKind.MACRO
    if trigger == "@" or prefix.endswith("@"):
        return RequestKind.TEST_PARAMETER
    if trigger == "{":
        return RequestKind.ASSERTION_METHOD
    return RequestKind.ACTION


def _to_completion_item(candidate: CompletionCandidate) -> CompletionItem:
    documentation: Any = candidate.documentation or None
    if documentation and candidate.kind in _MARKDOWN_KINDS:
        documentation = MarkupContent(kind=MarkupKind.Markdown, value=candidate.documentation)

    return CompletionItem(
        label=candidate.label,
        kind=_ITEM_KINDS[candidate.kind],
        detail=candidate.detail or None,
        documentation=documentation,
        insert_text=candidate.insert_text,
        insert_text_format=InsertTextFormat.Snippet if candidate.is_snippet else InsertTextFormat.PlainText,
    )


def start_server():
    """Start the Rhino LSP server."""
    logger.info("Starting Rhino Language Server...")
    server.start_io()


if __name__ == "__main__":
    start_server()
