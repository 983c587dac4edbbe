"""Tests for the file-system providers."""

import json

from poptags import Template
from poptags.loaders import DataDirectory, DirectoryReader, load_content


def test_reader_adds_suffix(tmp_path):
    (tmp_path / "page.html").write_text("Hello <pop:title />")
    read = DirectoryReader(tmp_path)
    assert read("page") == "Hello <pop:title />"
    assert read("page.html") == "Hello <pop:title />"


def test_reader_nested_names(tmp_path):
    (tmp_path / "layouts").mkdir()
    (tmp_path / "layouts" / "default.html").write_text("<pop:region name='main' />")
    assert DirectoryReader(tmp_path)("layouts/default") == "<pop:region name='main' />"


def test_reader_missing_returns_none(tmp_path):
    assert DirectoryReader(tmp_path)("nope") is None


def test_reader_refuses_paths_outside_root(tmp_path):
    root = tmp_path / "templates"
    root.mkdir()
    (tmp_path / "secret.html").write_text("secret")
    assert DirectoryReader(root)("../secret") is None


def test_reader_drives_template(tmp_path):
    (tmp_path / "page.html").write_text('<pop:include template="part" />!')
    (tmp_path / "part.html").write_text("Hi <pop:name />")
    template = Template(name="page", read=DirectoryReader(tmp_path))
    assert template.render({"name": "there"}) == "Hi there!"


def test_data_directory_yaml_and_json(tmp_path):
    (tmp_path / "site.yaml").write_text("name: Webpop\n")
    (tmp_path / "shop.json").write_text(json.dumps({"currency": "EUR"}))
    require = DataDirectory(tmp_path)
    assert require("site") == {"name": "Webpop"}
    assert require("shop") == {"currency": "EUR"}
    assert require("missing") is None


def test_load_content(tmp_path):
    path = tmp_path / "content.yaml"
    path.write_text("title: Hello\nposts:\n  - title: one\n  - title: two\n")
    assert load_content(path) == {"title": "Hello", "posts": [{"title": "one"}, {"title": "two"}]}


def test_load_empty_content(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert load_content(path) == {}
