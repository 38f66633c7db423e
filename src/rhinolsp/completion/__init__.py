"""
Completion engine.

- tokens: render manifest capabilities as snippet fragments
- synthesizer: expand manifests into named snippets
- scope: locate offsets inside ``{{$ ... }}`` argument spans
- assertions: snippets for expected results
- parameters: parameters declared in a test's own tables
- dispatcher: choose what to offer at a cursor position
"""

from rhinolsp.completion.assertions import assertion_snippets
from rhinolsp.completion.dispatcher import CompletionDispatcher, CompletionMode, RequestKind
from rhinolsp.completion.scope import ArgumentScope, is_action_arguments, resolve_scope
from rhinolsp.completion.snippets import CandidateKind, CompletionCandidate, Snippet
from rhinolsp.completion.synthesizer import synthesize_all, synthesize_snippets

__all__ = [
    "ArgumentScope",
    "CandidateKind",
    "CompletionCandidate",
    "CompletionDispatcher",
    "CompletionMode",
    "RequestKind",
    "Snippet",
    "assertion_snippets",
    "is_action_arguments",
    "resolve_scope",
    "synthesize_all",
    "synthesize_snippets",
]
