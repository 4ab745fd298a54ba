"""Tests for dependency and reverse dependency lookups."""

from __future__ import annotations

import pytest

from assetgraph.graph import describe_usage
from assetgraph.index import AssetNotFoundError, ProjectAssetIndex
from assetgraph.models import AssetDescriptor


def _asset(name: str, *depends: str, namespace: str | None = None) -> AssetDescriptor:
    return AssetDescriptor(name=name, path=f"{name}.php", namespace=namespace, depends=list(depends))


def _index(*assets: AssetDescriptor) -> ProjectAssetIndex:
    return ProjectAssetIndex(descriptors=list(assets), system_namespaces=("yii\\",))


def test_usage_reports_direct_dependencies_verbatim() -> None:
    index = _index(_asset("A"), _asset("C", "A", "yii\\web\\YiiAsset", "Missing"))

    report = describe_usage(index, "C")

    assert report.descriptor.name == "C"
    assert report.dependencies == ["A", "yii\\web\\YiiAsset", "Missing"]
    assert report.used_by == []


def test_usage_lists_direct_dependents_only() -> None:
    index = _index(_asset("A"), _asset("B", "A"), _asset("C", "B"), _asset("D", "A", "B"))

    report = describe_usage(index, "A")

    assert report.dependencies == []
    assert [d.name for d in report.used_by] == ["B", "D"]


def test_usage_matches_qualified_references() -> None:
    index = _index(
        _asset("AppAsset", namespace="app\\assets"),
        _asset("Page", "app\\assets\\AppAsset"),
    )

    report = describe_usage(index, "AppAsset")

    assert [d.name for d in report.used_by] == ["Page"]


def test_usage_excludes_the_target_itself() -> None:
    index = _index(_asset("A", "A"), _asset("B", "A"))

    report = describe_usage(index, "A")

    assert report.dependencies == ["A"]
    assert [d.name for d in report.used_by] == ["B"]


def test_usage_of_unknown_name_raises_not_found() -> None:
    index = _index(_asset("A"))

    with pytest.raises(AssetNotFoundError) as excinfo:
        describe_usage(index, "Nope")
    assert excinfo.value.name == "Nope"


def test_usage_skips_shadowed_duplicates_of_the_target() -> None:
    index = _index(
        _asset("ThemeAsset", "ThemeAsset", namespace="app\\assets"),
        _asset("ThemeAsset", namespace="app\\modules\\blog"),
        _asset("Page", "ThemeAsset"),
    )

    report = describe_usage(index, "ThemeAsset")

    assert report.descriptor.namespace == "app\\modules\\blog"
    assert [d.name for d in report.used_by] == ["Page"]
