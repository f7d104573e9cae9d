"""Tests for the declaration scanner and its transition table."""

from __future__ import annotations

import pytest

from attr_validator.exceptions import DuplicateDeclarationError, DuplicateNamespaceError, ScanError
from attr_validator.lexer import PhpToken
from attr_validator.models import DeclarationKind
from attr_validator.scanner import (
    Declare,
    DeclarationScanner,
    ScanState,
    SetNamespace,
    TokenClass,
    classify_token,
    step,
)


def _scan(source: str, path: str = "/src/Foo.php"):
    return DeclarationScanner().scan_source(source, path)


# ── Transitions ──


class TestTransitions:
    def test_token_classes(self):
        assert classify_token(PhpToken("T_NAMESPACE", "namespace")) is TokenClass.NAMESPACE
        assert classify_token(PhpToken("T_USE", "use")) is TokenClass.SKIP_KEYWORD
        assert classify_token(PhpToken("T_NAME_QUALIFIED", "A\\B")) is TokenClass.IDENTIFIER
        assert classify_token(PhpToken("T_NAME_FULLY_QUALIFIED", "\\A")) is TokenClass.OTHER
        assert classify_token(PhpToken("{", "{")) is TokenClass.OTHER

    def test_namespace_then_identifier(self):
        state, action = step(ScanState(), PhpToken("T_NAMESPACE", "namespace"))
        assert state.pending_namespace and action is None
        state, action = step(state, PhpToken("T_STRING", "App"))
        assert action == SetNamespace("App")
        assert state == ScanState()

    def test_declaration_keyword_sets_pending_kind(self):
        state, _ = step(ScanState(), PhpToken("T_TRAIT", "trait"))
        assert state.pending_kind is DeclarationKind.TRAIT
        state, action = step(state, PhpToken("T_STRING", "T"))
        assert action == Declare(DeclarationKind.TRAIT, "T")
        assert state.pending_kind is None

    def test_skip_consumed_by_declaration_keyword(self):
        state = ScanState(skip_next=True)
        state, action = step(state, PhpToken("T_CLASS", "class"))
        assert action is None
        assert not state.skip_next
        assert state.pending_kind is None

    def test_skip_consumed_by_identifier(self):
        state, action = step(ScanState(skip_next=True), PhpToken("T_STRING", "Base"))
        assert action is None
        assert state == ScanState()

    def test_abstract_reclassifies(self):
        state = ScanState(pending_kind=DeclarationKind.CLASS, abstract_pending=True)
        state, action = step(state, PhpToken("T_STRING", "Base"))
        assert action == Declare(DeclarationKind.ABSTRACT, "Base")
        assert not state.abstract_pending

    def test_other_clears_only_pending_kind(self):
        state = ScanState(pending_kind=DeclarationKind.CLASS, skip_next=True, abstract_pending=True)
        state, action = step(state, PhpToken("(", "("))
        assert action is None
        assert state == ScanState(skip_next=True, abstract_pending=True)

    def test_identifier_without_pending_is_noop(self):
        state, action = step(ScanState(), PhpToken("T_STRING", "strlen"))
        assert state == ScanState()
        assert action is None


# ── Whole files ──


class TestScanner:
    def test_namespaced_class(self):
        record = _scan("<?php namespace App; class Foo {}")
        assert record.namespace == "App"
        assert record.names(DeclarationKind.CLASS) == ["Foo"]
        assert record.total == 1
        assert record.source_path == "/src/Foo.php"

    def test_no_namespace(self):
        record = _scan("<?php class Foo {}")
        assert record.namespace is None
        assert record.total == 1

    def test_qualified_namespace(self):
        assert _scan("<?php namespace App\\Entity; class User {}").namespace == "App\\Entity"

    def test_extends_and_implements_not_counted(self):
        record = _scan("<?php class Foo extends Bar implements Baz { }")
        assert record.names(DeclarationKind.CLASS) == ["Foo"]
        assert record.total == 1

    def test_trait_use_inside_class_not_counted(self):
        record = _scan("<?php class Foo { use Loggable; public function a() {} }")
        assert record.total == 1

    def test_class_constant_fetch_not_counted(self):
        record = _scan("<?php class Foo { public function a() { return Bar::class; } }")
        assert record.names(DeclarationKind.CLASS) == ["Foo"]

    def test_anonymous_class_not_counted(self):
        record = _scan("<?php class Foo { public function a() { return new class {}; } }")
        assert record.names(DeclarationKind.CLASS) == ["Foo"]

    def test_two_classes(self):
        record = _scan("<?php class A{} class B{}")
        assert record.names(DeclarationKind.CLASS) == ["A", "B"]
        assert record.total == 2

    def test_empty_file(self):
        record = _scan("<?php\n// nothing\n")
        assert record.total == 0
        assert record.namespace is None

    def test_interface(self):
        record = _scan("<?php interface Greet{}")
        assert record.names(DeclarationKind.INTERFACE) == ["Greet"]
        assert record.names(DeclarationKind.CLASS) == []

    def test_abstract_class(self):
        record = _scan("<?php abstract class Base{}")
        assert record.names(DeclarationKind.ABSTRACT) == ["Base"]
        assert record.names(DeclarationKind.CLASS) == []

    def test_final_class_is_class(self):
        assert _scan("<?php final class Foo {}").names(DeclarationKind.CLASS) == ["Foo"]

    def test_keywords_in_comments_and_strings_ignored(self):
        record = _scan("<?php /* class A */ // class B\n$x = 'class C'; class D {}")
        assert record.names(DeclarationKind.CLASS) == ["D"]

    def test_data_after_halt_compiler_ignored(self):
        record = _scan("<?php class Stub {} __halt_compiler(); class Payload {}")
        assert record.names(DeclarationKind.CLASS) == ["Stub"]
        assert record.total == 1

    def test_scan_file(self, tmp_path):
        f = tmp_path / "Foo.php"
        f.write_text("<?php namespace App; class Foo {}")
        record = DeclarationScanner().scan_file(f)
        assert record.source_path == str(f)
        assert record.names(DeclarationKind.CLASS) == ["Foo"]


class TestScannerErrors:
    def test_second_namespace(self):
        with pytest.raises(DuplicateNamespaceError) as exc_info:
            _scan("<?php namespace A; namespace B;")
        assert exc_info.value.namespace == "B"
        assert exc_info.value.source_path == "/src/Foo.php"

    def test_namespace_after_declaration(self):
        with pytest.raises(DuplicateNamespaceError, match="must be defined first"):
            _scan("<?php class A {} namespace B;")

    def test_duplicate_class_name(self):
        with pytest.raises(DuplicateDeclarationError) as exc_info:
            _scan("<?php class A {} class A {}")
        assert exc_info.value.kind == "class"
        assert exc_info.value.name == "A"

    def test_same_name_different_kinds_allowed(self):
        record = _scan("<?php class A {} trait A {}")
        assert record.total == 2

    def test_duplicate_checked_against_abstract_bucket(self):
        record = _scan("<?php class A {} abstract class A {}")
        assert record.names(DeclarationKind.CLASS) == ["A"]
        assert record.names(DeclarationKind.ABSTRACT) == ["A"]
        with pytest.raises(DuplicateDeclarationError):
            _scan("<?php abstract class A {} abstract class A {}")

    def test_error_carries_partial_record(self):
        with pytest.raises(ScanError) as exc_info:
            _scan("<?php namespace App; class A {} class A {}")
        record = exc_info.value.record
        assert record.namespace == "App"
        assert record.names(DeclarationKind.CLASS) == ["A"]
