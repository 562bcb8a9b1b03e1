"""Tests for manifest discovery and repository scanning."""

from __future__ import annotations

import json

import pytest

from docmapper.discovery import discover_manifests
from docmapper.scanner import scan


class TestDiscovery:
    def test_top_level_only_by_default(self, tmp_path):
        (tmp_path / "package.json").write_text("{}", encoding="utf-8")
        (tmp_path / "README.md").write_text("hi", encoding="utf-8")
        nested = tmp_path / "service"
        nested.mkdir()
        (nested / "requirements.txt").write_text("requests\n", encoding="utf-8")

        assert [p.name for p in discover_manifests(tmp_path)] == ["package.json"]

    def test_recursive_skips_vendor_directories(self, tmp_path):
        (tmp_path / "package.json").write_text("{}", encoding="utf-8")
        nested = tmp_path / "service"
        nested.mkdir()
        (nested / "requirements.txt").write_text("requests\n", encoding="utf-8")
        vendored = tmp_path / "node_modules" / "left-pad"
        vendored.mkdir(parents=True)
        (vendored / "package.json").write_text("{}", encoding="utf-8")

        found = discover_manifests(tmp_path, recursive=True)
        relative = sorted(str(p.relative_to(tmp_path.resolve())) for p in found)
        assert relative == ["package.json", "service/requirements.txt"]


class TestScan:
    def test_lodash_range_stripped(self, tmp_path):
        (tmp_path / "package.json").write_text(
            json.dumps({"dependencies": {"lodash": "^4.17.21"}}), encoding="utf-8"
        )

        (record,) = scan(tmp_path)

        assert record.ecosystem == "npm"
        assert record.name == "lodash"
        assert record.version == "4.17.21"
        assert record.is_dev_dependency is False

    def test_multiple_ecosystems(self, tmp_path):
        (tmp_path / "package.json").write_text(
            json.dumps({"devDependencies": {"jest": "^29.0.0"}}), encoding="utf-8"
        )
        (tmp_path / "requirements.txt").write_text("requests==2.31.0\n", encoding="utf-8")
        (tmp_path / "go.mod").write_text(
            "module x\n\nrequire github.com/pkg/errors v0.9.1\n", encoding="utf-8"
        )

        records = scan(tmp_path)

        assert sorted(r.ecosystem for r in records) == ["go", "npm", "pypi"]

    def test_unparsable_manifest_is_skipped(self, tmp_path):
        (tmp_path / "package.json").write_text("{not json", encoding="utf-8")
        (tmp_path / "Cargo.toml").write_text('[dependencies]\nserde = "1.0"\n', encoding="utf-8")

        records = scan(tmp_path)

        assert [(r.ecosystem, r.name) for r in records] == [("rust", "serde")]

    @pytest.mark.parametrize(
        "content",
        [
            'tool = "x"\n',
            'project = "x"\n',
            '[tool]\npoetry = "x"\n',
            '[tool.poetry]\ngroup = "x"\ndependencies = ["requests"]\n',
            '[tool.poetry.group]\ndev = "x"\n',
        ],
    )
    def test_mistyped_pyproject_does_not_stop_scan(self, tmp_path, content):
        (tmp_path / "pyproject.toml").write_text(content, encoding="utf-8")
        (tmp_path / "package.json").write_text(
            json.dumps({"dependencies": {"lodash": "^4.17.21"}}), encoding="utf-8"
        )

        records = scan(tmp_path)

        assert [(r.ecosystem, r.name) for r in records] == [("npm", "lodash")]

    def test_pyproject_string_dependencies_ignored(self, tmp_path):
        (tmp_path / "pyproject.toml").write_text(
            '[project]\ndependencies = "requests"\n', encoding="utf-8"
        )
        (tmp_path / "package.json").write_text(
            json.dumps({"dependencies": {"lodash": "^4.17.21"}}), encoding="utf-8"
        )

        records = scan(tmp_path)

        assert [(r.ecosystem, r.name) for r in records] == [("npm", "lodash")]

    def test_empty_directory(self, tmp_path):
        assert scan(tmp_path) == []
