"""PHP token stream built from the tree-sitter-php parse tree.

The leaves of the parse tree are walked in source order and renamed after
PHP's own tokenizer (``PhpToken::getTokenName()``) for the kinds that matter
to declaration scanning. Names, variables, strings and comments are kept as
single tokens; the gaps between leaves become ``T_WHITESPACE``. Everything
after ``__halt_compiler();`` is inline data, as it is for PHP.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

import tree_sitter_php
from tree_sitter import Language, Node, Parser

PHP_LANGUAGE = Language(tree_sitter_php.language_php())

IGNORABLE_TOKENS = frozenset({"T_WHITESPACE", "T_COMMENT", "T_DOC_COMMENT", "T_OPEN_TAG"})

# Anonymous (keyword / punctuation) leaves whose PHP name is not derived from the text
_ANONYMOUS_TOKENS: dict[str, str] = {
    "\\": "T_NS_SEPARATOR",
    "::": "T_DOUBLE_COLON",
    "->": "T_OBJECT_OPERATOR",
    "?->": "T_NULLSAFE_OBJECT_OPERATOR",
    "=>": "T_DOUBLE_ARROW",
    "...": "T_ELLIPSIS",
    "#[": "T_ATTRIBUTE",
    "?>": "T_CLOSE_TAG",
    "and": "T_LOGICAL_AND",
    "or": "T_LOGICAL_OR",
    "xor": "T_LOGICAL_XOR",
    "die": "T_EXIT",
}

# Named nodes emitted whole, without descending into their children
_ATOMIC_NODES: dict[str, str] = {
    "text": "T_INLINE_HTML",
    "variable_name": "T_VARIABLE",
    "string": "T_CONSTANT_ENCAPSED_STRING",
    "encapsed_string": "T_CONSTANT_ENCAPSED_STRING",
    "heredoc": "T_ENCAPSED_AND_WHITESPACE",
    "nowdoc": "T_ENCAPSED_AND_WHITESPACE",
    "shell_command_expression": "T_ENCAPSED_AND_WHITESPACE",
    "integer": "T_LNUMBER",
    "float": "T_DNUMBER",
}

_NAME_NODES = frozenset({"name", "namespace_name", "qualified_name", "relative_name"})

_HALT_COMPILER = "__halt_compiler"


@dataclass(frozen=True)
class PhpToken:
    """One token: PHP token name, source text and 1-based start line."""

    name: str
    text: str
    line: int = 1

    def is_ignorable(self) -> bool:
        return self.name in IGNORABLE_TOKENS


def _name_token(text: str) -> str:
    if text.startswith("\\"):
        return "T_NAME_FULLY_QUALIFIED"
    if text.lower().startswith("namespace\\"):
        return "T_NAME_RELATIVE"
    if "\\" in text:
        return "T_NAME_QUALIFIED"
    return "T_STRING"


def token_name(node: Node, text: str) -> str:
    """PHP token name for a leaf (or atomic) node of the parse tree."""
    if not node.is_named:
        if node.type in _ANONYMOUS_TOKENS:
            return _ANONYMOUS_TOKENS[node.type]
        if node.type.isidentifier():
            return "T_" + node.type.upper()
        return text
    if node.type == "comment":
        return "T_DOC_COMMENT" if text.startswith("/**") else "T_COMMENT"
    if node.type == "php_tag":
        return "T_OPEN_TAG_WITH_ECHO" if text == "<?=" else "T_OPEN_TAG"
    if node.type in _NAME_NODES:
        return _name_token(text)
    if node.type.endswith("_modifier"):
        return "T_" + text.upper()
    if node.type == "ERROR":
        return "T_BAD_CHARACTER"
    return _ATOMIC_NODES.get(node.type, "T_STRING")


def _leaves(node: Node) -> Iterator[Node]:
    """Yield leaf and atomic nodes in source order, skipping inserted ones."""
    if node.is_missing:
        return
    if node.child_count == 0 or (
        node.is_named
        and (node.type in _ATOMIC_NODES or node.type in _NAME_NODES or node.type == "comment")
    ):
        if node.end_byte > node.start_byte:
            yield node
        return
    for child in node.children:
        yield from _leaves(child)


class PhpLexer:
    """Tokenize a single PHP source text."""

    def __init__(self, source: str) -> None:
        self._src = source.encode("utf-8")
        self._pos = 0
        self._line = 1
        self._tokens: list[PhpToken] = []

    def tokenize(self) -> list[PhpToken]:
        tree = Parser(PHP_LANGUAGE).parse(self._src)
        halted = False
        for node in _leaves(tree.root_node):
            self._gap(node.start_byte)
            text = self._text(node.start_byte, node.end_byte)
            if not halted and text.lower() == _HALT_COMPILER:
                self._emit("T_HALT_COMPILER", text, node.end_byte)
                halted = True
                continue
            self._emit(token_name(node, text), text, node.end_byte)
            # The statement terminator after __halt_compiler() ends PHP code for good
            if halted and text in (";", "?>"):
                break
        if self._pos < len(self._src):
            rest = self._text(self._pos, len(self._src))
            self._emit("T_INLINE_HTML" if halted else "T_WHITESPACE", rest, len(self._src))
        return self._tokens

    def _gap(self, start: int) -> None:
        if start > self._pos:
            self._emit("T_WHITESPACE", self._text(self._pos, start), start)

    def _text(self, start: int, end: int) -> str:
        return self._src[start:end].decode("utf-8", errors="replace")

    def _emit(self, name: str, text: str, end: int) -> None:
        self._tokens.append(PhpToken(name=name, text=text, line=self._line))
        self._line += text.count("\n")
        self._pos = end


def tokenize(source: str) -> list[PhpToken]:
    """Tokenize PHP source, keeping ignorable tokens."""
    return PhpLexer(source).tokenize()


def significant_tokens(source: str) -> list[PhpToken]:
    """Tokenize PHP source, dropping whitespace, comments and open tags."""
    return [t for t in tokenize(source) if not t.is_ignorable()]


def tokenize_file(path: str | Path) -> list[PhpToken]:
    return tokenize(Path(path).read_text(encoding="utf-8", errors="replace"))
