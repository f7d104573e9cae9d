"""End-to-end analysis tests over temporary PHP trees with a fake registry."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from attr_validator.analyzer import AttributeAnalyzer, analyze
from attr_validator.config import AnalyzerSettings
from attr_validator.exceptions import DuplicateDeclarationError, InvalidPathError
from attr_validator.models import AnomalousType, DeclarationKind
from attr_validator.scanner import DeclarationScanner
from attr_validator.testing import FakeTypeRegistry


class TestScenarios:
    def test_unloadable_class_is_not_found(self, tmp_path, write_php, registry):
        f = write_php("Foo.php", "<?php namespace App; class Foo {}")
        report = analyze(tmp_path, registry)
        assert report.not_found_classes == {"App\\Foo": str(f)}
        assert report.validation_view() == {"notFoundClasses": {"App\\Foo": str(f)}}

    def test_two_classes_is_suspect(self, tmp_path, write_php, registry):
        f = write_php("Two.php", "<?php class A{} class B{}")
        report = analyze(tmp_path, registry)
        assert len(report.suspect_classes) == 1
        record = report.suspect_classes[0]
        assert record.source_path == str(f)
        assert record.names(DeclarationKind.CLASS) == ("A", "B")
        assert record.total == 2
        # Suspect files never reach the registry
        assert registry.calls == []

    def test_ghost_property_attribute(self, tmp_path, write_php, registry):
        f = write_php("Bar.php", "<?php class Bar { #[Missing] public $field; #[Logged] function run() {} }")
        registry.register_attribute("Logged")
        registry.add_class("Bar", properties={"field": ["Missing"]}, methods={"run": ["Logged"]})

        report = analyze(tmp_path, registry)
        assert report.classes_with_undeclared_attributes == [
            AnomalousType(fqcn="Bar", source_path=str(f), property_attributes={"Missing": ["field"]})
        ]
        entry = report.to_snapshot()["classesWithUndeclaredAttributes"][0]
        assert entry["propertyAttributes"] == {"Missing": ["field"]}
        assert "methodAttributes" not in entry

    def test_sole_interface_goes_to_interface_registry(self, tmp_path, write_php, registry):
        f = write_php("Greet.php", "<?php interface Greet{}")
        report = analyze(tmp_path, registry)
        assert len(report.interfaces) == 1
        assert report.interfaces[0].names == ("Greet",)
        assert report.interfaces[0].source_path == str(f)
        assert report.not_found == ()
        assert report.clean == ()
        assert report.anomalous == ()
        assert report.suspects == ()

    def test_abstract_class_goes_to_abstract_registry(self, tmp_path, write_php, registry):
        write_php("Base.php", "<?php abstract class Base{}")
        report = analyze(tmp_path, registry)
        assert [e.names for e in report.abstracts] == [("Base",)]
        assert report.not_found == ()
        assert report.clean == ()

    def test_txt_root_fails_before_scanning(self, tmp_path, registry):
        f = tmp_path / "notes.txt"
        f.write_text("<?php class Foo {}")
        with patch.object(DeclarationScanner, "scan_file") as mock_scan:
            with pytest.raises(InvalidPathError):
                analyze(f, registry)
        mock_scan.assert_not_called()


class TestAnalyzer:
    def test_mixed_tree(self, tmp_path, write_php, registry):
        write_php("src/Entity/User.php", "<?php namespace App\\Entity; #[Entity] class User {}")
        write_php("src/Entity/Post.php", "<?php namespace App\\Entity; class Post {}")
        write_php("src/Traits/Stamp.php", "<?php namespace App\\Traits; trait Stamp {}")
        write_php("src/empty.php", "<?php return [];")
        registry.register_attribute("Entity")
        registry.add_class("App\\Entity\\User", attributes=["Entity"])

        report = analyze(tmp_path / "src", registry)
        assert list(report.classes_without_undeclared_attributes) == ["App\\Entity\\User"]
        assert list(report.not_found_classes) == ["App\\Entity\\Post"]
        assert [i.name for i in report.trait_items()] == ["Stamp"]
        assert [r.total for r in report.suspect_classes] == [0]
        assert report.root_path == str(tmp_path / "src")

    def test_single_file_root(self, tmp_path, write_php, registry):
        f = write_php("One.php", "<?php class One {}")
        write_php("Other.php", "<?php class Other {}")
        report = analyze(f, registry)
        assert list(report.not_found_classes) == ["One"]

    def test_excluded_directories(self, tmp_path, write_php, registry):
        write_php("App.php", "<?php class App {}")
        write_php("vendor/Lib.php", "<?php class Lib {}")
        report = analyze(tmp_path, registry, AnalyzerSettings(exclude_dirs=("vendor",)))
        assert list(report.not_found_classes) == ["App"]

    def test_scan_error_aborts_by_default(self, tmp_path, write_php, registry):
        write_php("Dup.php", "<?php class A {} class A {}")
        analyzer = AttributeAnalyzer(registry)
        with pytest.raises(DuplicateDeclarationError):
            analyzer.analyze(tmp_path)
        assert analyzer.progress.phases["scan"].status == "failed"

    def test_scan_error_as_suspect(self, tmp_path, write_php, registry):
        f = write_php("Dup.php", "<?php namespace N; class A {} class A {}")
        write_php("Ok.php", "<?php class Ok {}")
        report = analyze(tmp_path, registry, AnalyzerSettings(on_parse_error="suspect"))
        assert len(report.suspects) == 1
        record = report.suspects[0]
        assert record.source_path == str(f)
        assert record.namespace == "N"
        assert record.names(DeclarationKind.CLASS) == ("A",)
        assert "has already been found" in record.error
        assert list(report.not_found_classes) == ["Ok"]

    def test_registry_failure_becomes_not_found(self, tmp_path, write_php):
        write_php("Broken.php", "<?php class Broken {}")
        registry = FakeTypeRegistry(failing=["Broken"])
        report = analyze(tmp_path, registry)
        assert list(report.not_found_classes) == ["Broken"]

    def test_deterministic(self, tmp_path, write_php, registry):
        for name in ("C", "A", "B"):
            write_php(f"{name}.php", f"<?php class {name} {{}}")
        first = analyze(tmp_path, registry).to_snapshot()
        second = analyze(tmp_path, registry).to_snapshot()
        assert first == second
        assert list(first["notFoundClasses"]) == ["A", "B", "C"]

    def test_progress_summary(self, tmp_path, write_php, registry):
        write_php("A.php", "<?php class A {}")
        write_php("B.php", "<?php trait B {}")
        analyzer = AttributeAnalyzer(registry)
        analyzer.analyze(tmp_path)
        summary = analyzer.progress.get_summary()
        assert [p["phase"] for p in summary["phases"]] == ["discover", "scan", "validate"]
        assert all(p["status"] == "completed" for p in summary["phases"])
        assert [p["items"] for p in summary["phases"]] == [2, 2, 2]
