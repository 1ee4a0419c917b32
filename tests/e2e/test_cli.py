# ABOUTME: End-to-end tests for the bookcover CLI.
# ABOUTME: Drives run, inspect, and discover through Click's CliRunner with faked collaborators.

from pathlib import Path

import pytest
from click.testing import CliRunner

from bookcover.cli import cli
from bookcover.cli.commands import run_cmd
from bookcover.config import BASE_PATH_ENV
from bookcover.covers.lookup import CoverLookup
from bookcover.covers.resolver import CoverResolver
from bookcover.covers.transform import CoverTransformer
from bookcover.document.writer import STYLE_ID
from tests.fixtures.cover_responses import ALTERNATIVE_URL, ISBN
from tests.fixtures.fakes import FakeHttpClient


@pytest.fixture
def patched_resolver(monkeypatch, fake_http, fake_runner):
    """Make `run` build its resolver from the fakes instead of live services."""

    def _create(settings, cache):
        return CoverResolver(
            cache=cache,
            lookup=CoverLookup(fake_http),
            http_client=fake_http,
            transformer=CoverTransformer(runner=fake_runner),
            workers=settings.workers,
        )

    monkeypatch.setattr(run_cmd, "_create_resolver", _create)
    return fake_http


class TestVersion:
    def test_help(self) -> None:
        result = CliRunner().invoke(cli, ["--help"])
        assert result.exit_code == 0
        for command in ("run", "inspect", "discover"):
            assert command in result.output


class TestRunCommand:
    def test_default_document_under_base_path(self, site, patched_resolver) -> None:
        result = CliRunner().invoke(cli, ["run", "--base-path", str(site)])
        assert result.exit_code == 0, result.output
        assert "Started 'bookcover' action." in result.output
        assert "Finished 'bookcover' action." in result.output
        assert "2 downloaded" in result.output
        assert "1 default" in result.output

        html = (site / "Recently_ReadDatabase.html").read_text()
        assert f'src="covers/{ISBN}.jpg"' in html
        assert STYLE_ID in html

    def test_base_path_from_environment(self, site, patched_resolver) -> None:
        result = CliRunner().invoke(cli, ["run"], env={BASE_PATH_ENV: str(site)})
        assert result.exit_code == 0, result.output
        assert f'src="covers/{ISBN}.jpg"' in (site / "Recently_ReadDatabase.html").read_text()

    def test_explicit_path_and_output(self, site, reading_list, tmp_path, patched_resolver):
        dest = tmp_path / "out.html"
        result = CliRunner().invoke(
            cli,
            ["run", str(reading_list), "--base-path", str(site), "-o", str(dest), "--no-style"],
        )
        assert result.exit_code == 0, result.output
        assert "bookcover:" in reading_list.read_text()
        written = dest.read_text()
        assert "covers/default.jpg" in written
        assert STYLE_ID not in written

    def test_custom_stylesheet(self, site, reading_list, tmp_path, patched_resolver) -> None:
        css = tmp_path / "custom.css"
        css.write_text(".cover { border: 1px solid red; }")
        result = CliRunner().invoke(
            cli, ["run", str(reading_list), "--base-path", str(site), "--stylesheet", str(css)]
        )
        assert result.exit_code == 0, result.output
        assert "border: 1px solid red" in reading_list.read_text()

    def test_discover(self, site, patched_resolver) -> None:
        other = site / "pages" / "2023.html"
        other.parent.mkdir()
        other.write_text('<ul><li id="x"><p>bookcover: </p></li></ul>')
        (site / "pages" / "plain.html").write_text("<p>nothing</p>")

        result = CliRunner().invoke(
            cli, ["run", "--base-path", str(site), "--discover", str(site)]
        )
        assert result.exit_code == 0, result.output
        assert 'src="covers/default.jpg"' in other.read_text()
        assert (site / "pages" / "plain.html").read_text() == "<p>nothing</p>"

    def test_output_with_many_documents(self, site, reading_list, tmp_path, patched_resolver):
        second = site / "second.html"
        second.write_text(reading_list.read_text())
        result = CliRunner().invoke(
            cli,
            [
                "run", str(reading_list), str(second),
                "--base-path", str(site), "-o", str(tmp_path / "out.html"),
            ],
        )
        assert result.exit_code != 0
        assert "single document" in result.output

    def test_missing_document_is_fatal(self, site, patched_resolver) -> None:
        result = CliRunner().invoke(
            cli, ["run", str(site / "missing.html"), "--base-path", str(site)]
        )
        assert result.exit_code == 1
        assert "Error:" in result.output

    def test_failed_entries_listed(self, site, fake_runner, monkeypatch) -> None:
        http = FakeHttpClient(failing={ALTERNATIVE_URL})

        def _create(settings, cache):
            return CoverResolver(
                cache=cache,
                lookup=CoverLookup(http),
                http_client=http,
                transformer=CoverTransformer(runner=fake_runner),
            )

        monkeypatch.setattr(run_cmd, "_create_resolver", _create)
        result = CliRunner().invoke(cli, ["run", "--base-path", str(site)])
        assert result.exit_code == 0, result.output
        assert "1 failed" in result.output
        assert "entry-2" in result.output


class TestInspectCommand:
    def test_lists_entries(self, site, reading_list) -> None:
        (site / "covers" / f"{ISBN}.jpg").write_bytes(b"JPEG")
        result = CliRunner().invoke(cli, ["inspect", str(reading_list), "--base-path", str(site)])
        assert result.exit_code == 0, result.output
        assert "entry-1" in result.output
        assert "entry-2" in result.output
        assert "3 entries found" in result.output
        assert "missing" in result.output

    def test_writes_nothing(self, site, reading_list) -> None:
        before = reading_list.read_text()
        CliRunner().invoke(cli, ["inspect", str(reading_list), "--base-path", str(site)])
        assert reading_list.read_text() == before
        assert sorted(p.name for p in (site / "covers").iterdir()) == ["default.jpg"]

    def test_no_entries(self, tmp_path: Path) -> None:
        doc = tmp_path / "plain.html"
        doc.write_text("<p>nothing</p>")
        result = CliRunner().invoke(cli, ["inspect", str(doc)])
        assert result.exit_code == 0
        assert "0 entries found" in result.output

    def test_nonexistent_path(self) -> None:
        result = CliRunner().invoke(cli, ["inspect", "/nonexistent/page.html"])
        assert result.exit_code != 0


class TestDiscoverCommand:
    def test_lists_documents(self, site, reading_list) -> None:
        result = CliRunner().invoke(cli, ["discover", str(site)])
        assert result.exit_code == 0
        assert "Recently_ReadDatabase.html" in result.output
        assert "1 document(s) found" in result.output

    def test_none_found(self, tmp_path: Path) -> None:
        result = CliRunner().invoke(cli, ["discover", str(tmp_path)])
        assert result.exit_code == 0
        assert "No documents" in result.output
