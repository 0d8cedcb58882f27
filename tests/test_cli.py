"""Tests for the railsnav CLI."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from railsnav import __version__
from railsnav.cli import app

runner = CliRunner()

SHOW = """<h1><%= @post.title %></h1>
<% @comments.each do |comment| %>
  <p><%= comment.body %></p>
<% end %>
"""


@pytest.fixture()
def root(tmp_path: Path) -> Path:
    (tmp_path / "config").mkdir()
    (tmp_path / "config" / "environment.rb").write_text("")
    (tmp_path / "app" / "models").mkdir(parents=True)
    (tmp_path / "app" / "models" / "comment.rb").write_text("class Comment\nend\n")
    (tmp_path / "app" / "models" / "post.rb").write_text(
        "class Post < ActiveRecord::Base\n  has_many :comments\nend\n"
    )
    (tmp_path / "app" / "views" / "posts").mkdir(parents=True)
    (tmp_path / "app" / "views" / "posts" / "show.rhtml").write_text(SHOW)
    return tmp_path


class TestBasics:
    def test_version(self) -> None:
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_root(self, root: Path) -> None:
        result = runner.invoke(app, ["root", str(root / "app" / "models" / "post.rb")])
        assert result.exit_code == 0
        assert result.output.strip() == str(root)

    def test_root_outside_project(self, tmp_path: Path) -> None:
        (tmp_path / "lib").mkdir()
        result = runner.invoke(app, ["root", str(tmp_path / "lib")])
        assert result.exit_code == 1


class TestResolve:
    def test_token_and_context(self) -> None:
        result = runner.invoke(app, ["resolve", "comments", "--context", "has_many "])
        assert result.exit_code == 0
        assert result.output.strip() == "models/comment.rb"

    def test_explain(self) -> None:
        result = runner.invoke(app, ["resolve", "print", "-c", "layout ", "--explain"])
        assert result.exit_code == 0
        assert "views/layouts/print" in result.output
        assert "layout" in result.output

    def test_token_under_cursor(self, root: Path) -> None:
        post = root / "app" / "models" / "post.rb"
        result = runner.invoke(
            app, ["resolve", "--file", str(post), "--line", "2", "--column", "14"],
        )
        assert result.exit_code == 0
        assert result.output.strip() == "models/comment.rb"

    def test_no_token(self) -> None:
        result = runner.invoke(app, ["resolve"])
        assert result.exit_code == 1


class TestFind:
    def test_finds_model(self, root: Path) -> None:
        post = root / "app" / "models" / "post.rb"
        result = runner.invoke(
            app, ["find", "comments", "--file", str(post), "-c", "has_many "],
        )
        assert result.exit_code == 0
        assert result.output.strip() == str(root / "app" / "models" / "comment.rb")

    def test_missing(self, root: Path) -> None:
        post = root / "app" / "models" / "post.rb"
        result = runner.invoke(app, ["find", "Nothing", "--file", str(post)])
        assert result.exit_code == 1

    def test_override_search_path(self, root: Path) -> None:
        (root / "extra").mkdir()
        (root / "extra" / "widget.rb").write_text("class Widget\nend\n")
        (root / "config" / "railsnav.yml").write_text(f"path: ['{root / 'extra'}']\n")
        post = root / "app" / "models" / "post.rb"
        result = runner.invoke(app, ["find", "Widget", "--file", str(post)])
        assert result.exit_code == 0
        assert result.output.strip() == str(root / "extra" / "widget.rb")


class TestAlternate:
    def test_model_to_unit_test(self, root: Path) -> None:
        result = runner.invoke(app, ["alternate", str(root / "app" / "models" / "post.rb")])
        assert result.exit_code == 0
        assert result.output.strip() == str(root / "test" / "unit" / "post_test.rb")


class TestPartial:
    def test_dry_run(self, root: Path) -> None:
        show = root / "app" / "views" / "posts" / "show.rhtml"
        result = runner.invoke(
            app, ["partial", str(show), "comment", "--first", "3", "--last", "3", "--dry-run"],
        )
        assert result.exit_code == 0
        assert "<p><%= comment.body %></p>" in result.output
        assert not (show.parent / "_comment.rhtml").exists()
        assert show.read_text() == SHOW

    def test_writes_partial_and_template(self, root: Path) -> None:
        show = root / "app" / "views" / "posts" / "show.rhtml"
        result = runner.invoke(
            app, ["partial", str(show), "comment", "--first", "3", "--last", "3"],
        )
        assert result.exit_code == 0
        assert (show.parent / "_comment.rhtml").read_text() == "<p><%= comment.body %></p>\n"
        assert show.read_text().splitlines()[2] == (
            "  <%= render :partial => 'comment', :collection => @comments %>"
        )

    def test_invalid_name(self, root: Path) -> None:
        show = root / "app" / "views" / "posts" / "show.rhtml"
        result = runner.invoke(
            app, ["partial", str(show), "Bad-Name", "--first", "1", "--last", "1"],
        )
        assert result.exit_code == 1
        assert show.read_text() == SHOW
        assert sorted(p.name for p in show.parent.iterdir()) == ["show.rhtml"]

    def test_wrong_argument_count(self, root: Path) -> None:
        show = root / "app" / "views" / "posts" / "show.rhtml"
        result = runner.invoke(
            app, ["partial", str(show), "a", "b", "--first", "1", "--last", "1"],
        )
        assert result.exit_code == 1
        assert show.read_text() == SHOW

    def test_existing_partial(self, root: Path) -> None:
        show = root / "app" / "views" / "posts" / "show.rhtml"
        (show.parent / "_title.rhtml").write_text("keep\n")
        result = runner.invoke(
            app, ["partial", str(show), "title", "--first", "1", "--last", "1"],
        )
        assert result.exit_code == 1
        assert (show.parent / "_title.rhtml").read_text() == "keep\n"
        assert show.read_text() == SHOW


class TestOptionsAndCommands:
    def test_options_json(self, root: Path) -> None:
        result = runner.invoke(app, ["options", str(root / "app" / "models" / "post.rb")])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["path"][0] == str(root)
        assert ".rb" in data["suffixesadd"]

    def test_options_with_wrongly_typed_override(self, root: Path) -> None:
        (root / "config" / "railsnav.yml").write_text("suffixesadd: .haml\n")
        result = runner.invoke(app, ["options", str(root / "app" / "models" / "post.rb")])
        assert result.exit_code == 0
        assert ".rb" in json.loads(result.output)["suffixesadd"]

    def test_rake_dry_run(self, root: Path) -> None:
        result = runner.invoke(app, ["rake", "test", "--path", str(root), "--dry-run"])
        assert result.exit_code == 0
        assert result.output.strip() == f"rake -f {root / 'Rakefile'} test"

    def test_script_dry_run(self, root: Path) -> None:
        result = runner.invoke(
            app, ["script", "generate", "model", "Post", "--path", str(root), "--dry-run"],
        )
        assert result.exit_code == 0
        assert result.output.strip() == f"ruby {root / 'script' / 'generate'} model Post"

    def test_console_dry_run(self, root: Path) -> None:
        result = runner.invoke(app, ["console", "--path", str(root), "--dry-run"])
        assert result.exit_code == 0
        assert result.output.strip().endswith("console")

    def test_cd(self, root: Path) -> None:
        result = runner.invoke(app, ["cd", "app", "--path", str(root)])
        assert result.exit_code == 0
        assert result.output.strip() == str((root / "app").resolve())
