"""Tests for dependency-scan JSON loading."""

from __future__ import annotations

import json

import pytest

from docmapper.inputs import InputFormatError, load_dependencies_from_json, parse_dependency_scan

DOCUMENT = {
    "dependencies": [
        {
            "ecosystem": "npm",
            "dependency": {"name": "lodash", "version": "4.17.21", "source": "registry"},
            "manifest_path": "package.json",
            "metadata": {"dev_dependency": False},
        },
        {
            "ecosystem": "python",
            "dependency": {"name": "pytest", "version": "8.0.0"},
            "manifest_path": "requirements-dev.txt",
            "metadata": {"dev_dependency": True},
        },
    ]
}


class TestParseDependencyScan:
    def test_valid_document(self):
        records = parse_dependency_scan(DOCUMENT)
        assert [(r.ecosystem, r.name, r.version) for r in records] == [
            ("npm", "lodash", "4.17.21"),
            ("python", "pytest", "8.0.0"),
        ]
        assert records[1].is_dev_dependency is True

    @pytest.mark.parametrize("document", [{}, {"dependencies": {}}, [], "text"])
    def test_missing_dependencies_array(self, document):
        with pytest.raises(InputFormatError, match="missing dependencies array"):
            parse_dependency_scan(document)

    def test_entry_without_name(self):
        document = {"dependencies": [{"ecosystem": "npm", "dependency": {"version": "1"}}]}
        with pytest.raises(InputFormatError, match="name"):
            parse_dependency_scan(document)

    def test_empty_list(self):
        assert parse_dependency_scan({"dependencies": []}) == []


class TestLoadFromFile:
    def test_load(self, tmp_path):
        path = tmp_path / "scan.json"
        path.write_text(json.dumps(DOCUMENT), encoding="utf-8")
        assert len(load_dependencies_from_json(path)) == 2

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "scan.json"
        path.write_text("{", encoding="utf-8")
        with pytest.raises(InputFormatError, match="Invalid JSON"):
            load_dependencies_from_json(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(InputFormatError, match="Failed to read"):
            load_dependencies_from_json(tmp_path / "absent.json")
