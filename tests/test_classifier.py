"""Tests for the suspicion classifier."""

from __future__ import annotations

from attr_validator.classifier import Disposition, classify, is_suspect
from attr_validator.models import DeclarationKind, DeclarationRecord


def _record(namespace=None, **names) -> DeclarationRecord:
    record = DeclarationRecord(source_path="/src/x.php", namespace=namespace)
    for kind_name, values in names.items():
        record.declarations[DeclarationKind(kind_name)].extend(values)
    return record


class TestIsSuspect:
    def test_zero_is_suspect(self):
        assert is_suspect(_record())

    def test_one_is_not_suspect(self):
        assert not is_suspect(_record(trait=["T"]))

    def test_many_across_kinds_is_suspect(self):
        assert is_suspect(_record(**{"class": ["A"], "interface": ["I"]}))


class TestClassify:
    def test_empty_record(self):
        result = classify(_record())
        assert result.disposition is Disposition.SUSPECT
        assert result.kind is None

    def test_two_classes(self):
        record = _record(**{"class": ["A", "B"]})
        result = classify(record)
        assert result.disposition is Disposition.SUSPECT
        assert result.record is record

    def test_sole_class_is_candidate(self):
        result = classify(_record("App", **{"class": ["Foo"]}))
        assert result.disposition is Disposition.CANDIDATE
        assert result.kind is DeclarationKind.CLASS
        assert result.namespace == "App"
        assert result.class_name == "Foo"
        assert result.side_entry is None

    def test_sole_interface_goes_to_side_registry(self):
        result = classify(_record("App", interface=["Greet"]))
        assert result.disposition is Disposition.SIDE
        assert result.kind is DeclarationKind.INTERFACE
        assert result.side_entry.names == ("Greet",)
        assert result.side_entry.namespace == "App"
        assert result.side_entry.source_path == "/src/x.php"

    def test_sole_abstract_goes_to_side_registry(self):
        result = classify(_record(abstract=["Base"]))
        assert result.disposition is Disposition.SIDE
        assert result.kind is DeclarationKind.ABSTRACT
        assert result.side_entry.namespace is None

    def test_sole_trait(self):
        assert classify(_record(trait=["T"])).kind is DeclarationKind.TRAIT
