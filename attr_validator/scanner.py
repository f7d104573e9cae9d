"""Declaration scanner: single forward pass over a file's PHP tokens.

The scanner is a minimal recognizer, not a grammar. It records the namespace
and the names following ``class``/``trait``/``interface`` keywords, and lets
odd files through as odd records (zero or several declarations) for the
suspicion classifier to reject. Only two conditions are fatal:

    * a namespace declared twice, or after a declaration was captured
    * the same name declared twice for one kind

The state is explicit (:class:`ScanState`) and every token class has a pure
transition ``(state, token) -> (state, action)`` in :data:`TRANSITIONS`.
Actions are applied to the :class:`DeclarationRecord` by the scanner.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path
from typing import Callable, Iterable, Union

from attr_validator.exceptions import DuplicateDeclarationError, DuplicateNamespaceError
from attr_validator.lexer import PhpToken, tokenize
from attr_validator.models.declaration import DeclarationKind, DeclarationRecord


class TokenClass(Enum):
    """Token classes the scanner distinguishes."""

    NAMESPACE = "namespace"
    SKIP_KEYWORD = "skip_keyword"  # extends / implements / use
    ABSTRACT = "abstract"
    DECLARATION = "declaration"  # class / trait / interface
    IDENTIFIER = "identifier"
    OTHER = "other"


_TOKEN_CLASSES: dict[str, TokenClass] = {
    "T_NAMESPACE": TokenClass.NAMESPACE,
    "T_EXTENDS": TokenClass.SKIP_KEYWORD,
    "T_IMPLEMENTS": TokenClass.SKIP_KEYWORD,
    "T_USE": TokenClass.SKIP_KEYWORD,
    "T_ABSTRACT": TokenClass.ABSTRACT,
    "T_CLASS": TokenClass.DECLARATION,
    "T_TRAIT": TokenClass.DECLARATION,
    "T_INTERFACE": TokenClass.DECLARATION,
    "T_STRING": TokenClass.IDENTIFIER,
    "T_NAME_QUALIFIED": TokenClass.IDENTIFIER,
}

_DECLARATION_KINDS: dict[str, DeclarationKind] = {
    "T_CLASS": DeclarationKind.CLASS,
    "T_TRAIT": DeclarationKind.TRAIT,
    "T_INTERFACE": DeclarationKind.INTERFACE,
}


def classify_token(token: PhpToken) -> TokenClass:
    return _TOKEN_CLASSES.get(token.name, TokenClass.OTHER)


@dataclass(frozen=True)
class ScanState:
    pending_namespace: bool = False
    pending_kind: DeclarationKind | None = None
    skip_next: bool = False
    abstract_pending: bool = False


@dataclass(frozen=True)
class SetNamespace:
    name: str


@dataclass(frozen=True)
class Declare:
    kind: DeclarationKind
    name: str


Action = Union[SetNamespace, Declare, None]
Transition = Callable[[ScanState, PhpToken], tuple[ScanState, Action]]


def _on_namespace(state: ScanState, token: PhpToken) -> tuple[ScanState, Action]:
    return replace(state, pending_namespace=True), None


def _on_skip_keyword(state: ScanState, token: PhpToken) -> tuple[ScanState, Action]:
    return replace(state, skip_next=True), None


def _on_abstract(state: ScanState, token: PhpToken) -> tuple[ScanState, Action]:
    return replace(state, abstract_pending=True), None


def _on_declaration(state: ScanState, token: PhpToken) -> tuple[ScanState, Action]:
    # A keyword inside an implements/use clause consumes the pending skip
    if state.skip_next:
        return replace(state, skip_next=False), None
    return replace(state, pending_kind=_DECLARATION_KINDS[token.name]), None


def _on_identifier(state: ScanState, token: PhpToken) -> tuple[ScanState, Action]:
    if state.pending_namespace:
        return replace(state, pending_namespace=False), SetNamespace(token.text)
    if state.skip_next:
        return replace(state, skip_next=False), None
    if state.pending_kind is not None:
        kind = state.pending_kind
        if state.abstract_pending:
            kind = DeclarationKind.ABSTRACT
        return (
            replace(state, pending_kind=None, abstract_pending=False),
            Declare(kind, token.text),
        )
    return state, None


def _on_other(state: ScanState, token: PhpToken) -> tuple[ScanState, Action]:
    if state.pending_kind is None:
        return state, None
    return replace(state, pending_kind=None), None


TRANSITIONS: dict[TokenClass, Transition] = {
    TokenClass.NAMESPACE: _on_namespace,
    TokenClass.SKIP_KEYWORD: _on_skip_keyword,
    TokenClass.ABSTRACT: _on_abstract,
    TokenClass.DECLARATION: _on_declaration,
    TokenClass.IDENTIFIER: _on_identifier,
    TokenClass.OTHER: _on_other,
}


def step(state: ScanState, token: PhpToken) -> tuple[ScanState, Action]:
    """Advance the scanner by one significant token."""
    return TRANSITIONS[classify_token(token)](state, token)


class DeclarationScanner:
    """Build a :class:`DeclarationRecord` from one file's tokens."""

    def scan(self, tokens: Iterable[PhpToken], source_path: str) -> DeclarationRecord:
        record = DeclarationRecord(source_path=source_path)
        state = ScanState()
        for token in tokens:
            if token.is_ignorable():
                continue
            state, action = step(state, token)
            if action is not None:
                self._apply(record, action)
        return record

    def scan_source(self, source: str, source_path: str) -> DeclarationRecord:
        return self.scan(tokenize(source), source_path)

    def scan_file(self, path: str | Path) -> DeclarationRecord:
        path = Path(path)
        source = path.read_text(encoding="utf-8", errors="replace")
        return self.scan_source(source, str(path))

    def _apply(self, record: DeclarationRecord, action: SetNamespace | Declare) -> None:
        if isinstance(action, SetNamespace):
            if record.namespace is not None or record.has_declarations():
                raise DuplicateNamespaceError(action.name, record.source_path, record)
            record.namespace = action.name
            return

        bucket = record.declarations[action.kind]
        if action.name in bucket:
            raise DuplicateDeclarationError(
                action.kind.value, action.name, record.source_path, record
            )
        bucket.append(action.name)
