"""CLI behaviour tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from assetgraph.cli import _build_parser, main
from tests._fixtures.project_builder import ProjectBuilder


def test_cli_accepts_verbose_before_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["--verbose", "order"])
    assert args.verbose is True
    assert args.command == "order"


def test_cli_accepts_verbose_after_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["bundles", "-v", "-m", "shop"])
    assert args.verbose is True
    assert args.module == "shop"


def test_cli_deps_name_is_optional() -> None:
    parser = _build_parser()
    args = parser.parse_args(["deps"])
    assert args.command == "deps"
    assert args.name is None
    assert args.project == "."
    assert args.verbose is False


def test_cli_requires_command() -> None:
    with pytest.raises(SystemExit):
        _build_parser().parse_args([])


def test_main_prints_registration_order(project_builder: ProjectBuilder, capsys) -> None:
    project_builder.asset("assets/AppAsset.php")
    project_builder.asset(
        "modules/shop/ShopAsset.php",
        namespace="app\\modules\\shop",
        depends=["AppAsset::class"],
    )

    main(["-p", str(project_builder.path()), "order"])

    assert capsys.readouterr().out == "AppAsset (app)\nShopAsset (shop)\n"


def test_main_reports_cycles(project_builder: ProjectBuilder, capsys) -> None:
    project_builder.asset("assets/XAsset.php", depends=["YAsset::class"])
    project_builder.asset("assets/YAsset.php", depends=["XAsset::class"])
    project = str(project_builder.path())

    main(["-p", project, "cycles"])
    assert capsys.readouterr().out == "XAsset → YAsset → XAsset\n"

    main(["-p", project, "order"])
    assert capsys.readouterr().out == "# skipped (circular): XAsset, YAsset\n"


def test_main_without_cycles(project_builder: ProjectBuilder, capsys) -> None:
    project_builder.asset("assets/AppAsset.php")

    main(["-p", str(project_builder.path()), "cycles"])

    assert capsys.readouterr().out == "No circular dependencies found\n"


def test_main_renders_bundle_listing(project_builder: ProjectBuilder, capsys) -> None:
    project_builder.asset("assets/AppAsset.php", css=["site.css"])

    main(["-p", str(project_builder.path()), "bundles"])

    out = capsys.readouterr().out
    assert out.startswith("Asset Bundles Found: 1\n")
    assert "  - CSS: 1 files\n" in out


def test_main_exits_on_unknown_asset(project_builder: ProjectBuilder, capsys) -> None:
    project_builder.asset("assets/AppAsset.php")

    with pytest.raises(SystemExit) as excinfo:
        main(["-p", str(project_builder.path()), "deps", "MissingAsset"])

    assert excinfo.value.code == 1
    assert "Asset 'MissingAsset' not found" in capsys.readouterr().err


def test_main_exits_on_missing_project(tmp_path: Path, capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["-p", str(tmp_path / "missing"), "bundles"])

    assert excinfo.value.code == 1
    assert "Project path not found" in capsys.readouterr().err


def test_main_exits_on_bad_config(project_builder: ProjectBuilder, capsys) -> None:
    (project_builder.path() / ".assetgraph.yml").write_text("- not a mapping\n", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        main(["-p", str(project_builder.path()), "bundles"])

    assert excinfo.value.code == 1
    assert "configuration error" in capsys.readouterr().err


def test_main_writes_log_file(project_builder: ProjectBuilder, tmp_path: Path, capsys) -> None:
    project_builder.asset("assets/AppAsset.php")
    log_file = tmp_path / "assetgraph.log"

    main(["-v", "--log-file", str(log_file), "-p", str(project_builder.path()), "order"])

    assert capsys.readouterr().out == "AppAsset (app)\n"
    assert "Indexed 1 asset bundles" in log_file.read_text(encoding="utf-8")


def test_main_rejects_file_as_project(project_builder: ProjectBuilder, capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["-p", str(project_builder.path() / "yii"), "bundles"])

    assert excinfo.value.code == 1
    assert "not a directory" in capsys.readouterr().err


def test_strict_order_fails_on_cycle(project_builder: ProjectBuilder, capsys) -> None:
    project_builder.asset("assets/XAsset.php", depends=["YAsset::class"])
    project_builder.asset("assets/YAsset.php", depends=["XAsset::class"])

    with pytest.raises(SystemExit) as excinfo:
        main(["-p", str(project_builder.path()), "order", "--strict"])

    assert excinfo.value.code == 1
    assert capsys.readouterr().out == "Circular dependency: XAsset → YAsset → XAsset\n"


def test_strict_order_prints_complete_order(project_builder: ProjectBuilder, capsys) -> None:
    project_builder.asset("assets/AppAsset.php")
    project_builder.asset("assets/PageAsset.php", depends=["AppAsset::class"])

    main(["-p", str(project_builder.path()), "order", "--strict"])

    assert capsys.readouterr().out == "AppAsset (app)\nPageAsset (app)\n"
