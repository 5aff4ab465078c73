import json
from pathlib import Path

import pytest

from elm_sideload.adapters.filesystem.local import LocalFileSystem
from elm_sideload.adapters.workspace.slot import SlotWorkspace
from elm_sideload.application.repo_cache import RepositoryCache
from elm_sideload.domain.environment import Environment

from fakes import ELM_JSON, SHA_MAIN, SHA_SAFE, FakeGit


@pytest.fixture
def project(tmp_path: Path) -> Path:
    root = tmp_path / "project"
    root.mkdir()
    (root / "elm.json").write_text(json.dumps(ELM_JSON, indent=4))
    return root


@pytest.fixture
def elm_home(tmp_path: Path) -> Path:
    home = tmp_path / "elm-home"
    home.mkdir()
    return home


@pytest.fixture
def env(project: Path, elm_home: Path, tmp_path: Path) -> Environment:
    return Environment(
        cwd=project,
        home=tmp_path / "user-home",
        platform="linux",
        elm_home=str(elm_home),
    )


@pytest.fixture
def packages_root(elm_home: Path) -> Path:
    return elm_home / "0.19.1" / "packages"


@pytest.fixture
def fs() -> LocalFileSystem:
    return LocalFileSystem()


@pytest.fixture
def workspace() -> SlotWorkspace:
    return SlotWorkspace()


@pytest.fixture
def git() -> FakeGit:
    fake = FakeGit()
    fake.add_remote(
        "https://github.com/lydell/virtual-dom",
        {"main": SHA_MAIN, "safe": SHA_SAFE},
    )
    return fake


@pytest.fixture
def cache(git: FakeGit, env: Environment) -> RepositoryCache:
    return RepositoryCache(git, env.cache_root)


@pytest.fixture
def write_config(project: Path):
    def _write(sideloads: list[dict], **extra) -> Path:
        path = project / "elm.sideload.json"
        doc = {"elmJsonPath": "elm.json", "requireElmHome": False, **extra, "sideloads": sideloads}
        path.write_text(json.dumps(doc, indent=2))
        return path

    return _write


@pytest.fixture
def patched_html(project: Path) -> Path:
    source = project / "patched-html"
    (source / "src" / "Html").mkdir(parents=True)
    (source / "elm.json").write_text('{"type": "package", "name": "elm/html"}')
    (source / "src" / "Html.elm").write_text("module Html exposing (..)\n")
    (source / "src" / "Html" / "Events.elm").write_text("module Html.Events exposing (..)\n")
    (source / ".git").mkdir()
    (source / ".git" / "HEAD").write_text("ref: refs/heads/main\n")
    return source


@pytest.fixture
def in_project(project: Path, elm_home: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.chdir(project)
    monkeypatch.setenv("ELM_HOME", str(elm_home))
    return project
