import json

import pytest

from elm_sideload.application.config_store import dumps_config, read_config, write_config
from elm_sideload.domain.registry import SideloadConfig, SideloadRegistration
from elm_sideload.domain.sources import GithubSource


def test_missing_config(fs, env):
    result = read_config(fs, env.config_path)
    assert result.value is None
    assert [d.code for d in result.diagnostics] == ["NO_SIDELOAD_CONFIG_FOUND"]


def test_invalid_json(fs, env):
    env.config_path.write_text("{not json")
    result = read_config(fs, env.config_path)
    assert [d.code for d in result.diagnostics] == ["INVALID_SIDELOAD_CONFIG"]


def test_branch_is_not_a_valid_pin(fs, env, write_config):
    write_config(
        [
            {
                "originalPackageName": "elm/virtual-dom",
                "originalPackageVersion": "1.0.3",
                "sideloadedPackage": {
                    "type": "github",
                    "url": "https://github.com/lydell/virtual-dom",
                    "pinTo": {"branch": "main"},
                },
            }
        ]
    )
    result = read_config(fs, env.config_path)
    assert result.value is None
    assert [d.code for d in result.diagnostics] == ["INVALID_SIDELOAD_CONFIG"]


def test_abbreviated_sha_is_not_a_valid_pin(fs, env, write_config):
    write_config(
        [
            {
                "originalPackageName": "elm/virtual-dom",
                "originalPackageVersion": "1.0.3",
                "sideloadedPackage": {
                    "type": "github",
                    "url": "https://github.com/lydell/virtual-dom",
                    "pinTo": {"sha": "abc1234"},
                },
            }
        ]
    )
    assert read_config(fs, env.config_path).exit_code == 1


@pytest.mark.parametrize("version", ["../../..", "1.0", "1.0.0/../..", "latest"])
def test_version_must_be_major_minor_patch(fs, env, write_config, version):
    write_config(
        [
            {
                "originalPackageName": "elm/html",
                "originalPackageVersion": version,
                "sideloadedPackage": {"type": "relative", "path": "./patched-html"},
            }
        ]
    )
    result = read_config(fs, env.config_path)
    assert result.value is None
    assert [d.code for d in result.diagnostics] == ["INVALID_SIDELOAD_CONFIG"]


def test_unknown_keys_are_rejected(fs, env, write_config):
    write_config([], extra="nope")
    assert [d.code for d in read_config(fs, env.config_path).diagnostics] == ["INVALID_SIDELOAD_CONFIG"]


def test_written_config_reads_back(fs, env):
    config = SideloadConfig(
        sideloads=(
            SideloadRegistration(
                original_package_name="elm/virtual-dom",
                original_package_version="1.0.3",
                sideloaded_package=GithubSource(url="https://github.com/lydell/virtual-dom", sha="a" * 40),
            ),
        )
    )
    assert write_config(fs, env.config_path, config).ok
    assert read_config(fs, env.config_path).value == config


def test_dumps_config_is_indented_with_trailing_newline():
    text = dumps_config(SideloadConfig())
    assert text.endswith("}\n")
    assert text.startswith('{\n  "elmJsonPath"')
    assert json.loads(text) == {"elmJsonPath": "elm.json", "requireElmHome": False, "sideloads": []}
