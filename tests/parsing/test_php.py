"""Tests for the PHP literal reader."""

from __future__ import annotations

import pytest

from assetgraph.parsing.php import (
    ClassRef,
    Constant,
    PhpSyntaxError,
    read_namespace,
    read_property,
    read_use_statements,
    strip_comments,
)


def test_read_property_reports_missing_declaration() -> None:
    found, value = read_property("<?php class A { public $js = []; }", "css")
    assert found is False
    assert value is None


def test_read_property_parses_short_and_long_arrays() -> None:
    source = """
    public $css = ['css/site.css', "css/print.css"];
    public $js = array('js/app.js',);
    """
    assert read_property(source, "css") == (True, ["css/site.css", "css/print.css"])
    assert read_property(source, "js") == (True, ["js/app.js"])


def test_read_property_handles_class_references_and_escapes() -> None:
    source = r"""
    public $depends = [
        'yii\web\YiiAsset',
        'yii\\bootstrap5\\BootstrapAsset',
        JqueryAsset::class,
        \app\assets\AppAsset::class,
    ];
    """
    found, value = read_property(source, "depends")
    assert found is True
    assert value == [
        "yii\\web\\YiiAsset",
        "yii\\bootstrap5\\BootstrapAsset",
        ClassRef(scope="JqueryAsset", constant="class"),
        ClassRef(scope="app\\assets\\AppAsset", constant="class"),
    ]
    assert value[2].literal == "JqueryAsset"


def test_read_property_concatenates_constants_and_strings() -> None:
    source = "public $sourcePath = __DIR__ . '/dist';"
    assert read_property(source, "sourcePath") == (True, "__DIR__/dist")


def test_read_property_parses_associative_arrays() -> None:
    source = "public $publishOptions = ['only' => ['*.css'], 'forceCopy' => YII_DEBUG, 'linkAssets' => true];"
    found, value = read_property(source, "publishOptions")
    assert found is True
    assert value == {"only": ["*.css"], "forceCopy": Constant("YII_DEBUG"), "linkAssets": True}


def test_typed_property_declaration_is_found() -> None:
    source = "public array $js = ['a.js'];"
    assert read_property(source, "js") == (True, ["a.js"])


def test_read_property_rejects_method_calls() -> None:
    source = "public $baseUrl = Yii::getAlias('@web');"
    with pytest.raises(PhpSyntaxError):
        read_property(source, "baseUrl")


def test_read_property_rejects_unterminated_array() -> None:
    with pytest.raises(PhpSyntaxError):
        read_property("public $css = ['a.css', ", "css")


def test_strip_comments_preserves_strings_and_offsets() -> None:
    source = "$a = 'http://x'; // trailing\n/* $css = ['old.css']; */ $b = '#fff'; # note\n"
    stripped = strip_comments(source)
    assert len(stripped) == len(source)
    assert "'http://x'" in stripped
    assert "'#fff'" in stripped
    assert "old.css" not in stripped
    assert "trailing" not in stripped
    assert "note" not in stripped


def test_commented_out_declaration_is_ignored() -> None:
    source = strip_comments("// public $css = ['old.css'];\npublic $css = ['new.css'];\n")
    assert read_property(source, "css") == (True, ["new.css"])


def test_namespace_and_use_statements() -> None:
    source = """<?php
    namespace app\\modules\\shop\\widgets;

    use yii\\base\\Widget;
    use app\\assets\\{AppAsset, ShopAsset};
    """
    assert read_namespace(source) == "app\\modules\\shop\\widgets"
    assert read_use_statements(source) == [
        "yii\\base\\Widget",
        "app\\assets\\AppAsset",
        "app\\assets\\ShopAsset",
    ]
