import json
import shutil
import subprocess

import pytest
from typer.testing import CliRunner

from elm_sideload.entrypoints.cli import app

pytestmark = pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")


def _git(cwd, *args):
    return subprocess.run(
        ["git", "-c", "user.name=Test", "-c", "user.email=test@example.com", *args],
        cwd=cwd,
        check=True,
        capture_output=True,
        text=True,
    ).stdout.strip()


@pytest.fixture
def upstream(tmp_path):
    repo = tmp_path / "remotes" / "lydell" / "virtual-dom"
    (repo / "src").mkdir(parents=True)
    _git(repo, "init", "-q", "-b", "main")
    (repo / "elm.json").write_text('{"type": "package", "name": "elm/virtual-dom"}\n')
    (repo / "src" / "VirtualDom.elm").write_text("module VirtualDom exposing (..)\n-- v1\n")
    _git(repo, "add", ".")
    _git(repo, "commit", "-q", "-m", "v1")
    return repo


def test_branch_pin_install_and_unload(upstream, in_project, packages_root):
    runner = CliRunner()
    first = _git(upstream, "rev-parse", "HEAD")

    assert runner.invoke(app, ["init"]).exit_code == 0
    result = runner.invoke(
        app, ["configure", "elm/virtual-dom", "--github", str(upstream), "--branch", "main", "--json"]
    )
    assert result.exit_code == 0, result.stdout
    config = json.loads((in_project / "elm.sideload.json").read_text())
    assert config["sideloads"][0]["sideloadedPackage"]["pinTo"] == {"sha": first}

    # A later commit on the branch must not change what gets installed.
    (upstream / "src" / "VirtualDom.elm").write_text("module VirtualDom exposing (..)\n-- v2\n")
    _git(upstream, "commit", "-q", "-am", "v2")

    result = runner.invoke(app, ["install", "--always", "--json"])
    assert result.exit_code == 0, result.stdout
    slot = packages_root / "elm" / "virtual-dom" / "1.0.3"
    assert "-- v1" in (slot / "src" / "VirtualDom.elm").read_text()
    assert (slot / ".elm-sideload").exists()
    assert not (slot / ".git").exists()

    assert runner.invoke(app, ["unload"]).exit_code == 0
    assert not slot.exists()


def test_dirty_cache_is_reported(upstream, in_project):
    runner = CliRunner()
    runner.invoke(app, ["init"])
    sha = _git(upstream, "rev-parse", "HEAD")
    assert runner.invoke(app, ["configure", "elm/virtual-dom", "--github", str(upstream), "--sha", sha[:8]]).exit_code == 0

    clone = in_project / ".elm.sideload.cache" / "lydell" / "virtual-dom"
    (clone / "src" / "VirtualDom.elm").write_text("-- local edit\n")
    _git(upstream, "commit", "-q", "--allow-empty", "-m", "v2")
    newer = _git(upstream, "rev-parse", "HEAD")

    result = runner.invoke(
        app, ["configure", "elm/virtual-dom", "--github", str(upstream), "--sha", newer, "--json"]
    )
    assert result.exit_code == 1
    codes = [d["code"] for d in json.loads(result.stdout)["diagnostics"]]
    assert codes == ["DIRTY_REPO"]
    assert (clone / "src" / "VirtualDom.elm").read_text() == "-- local edit\n"
