from elm_sideload.domain.registry import (
    PackagesPathOverride,
    SideloadConfig,
    SideloadRegistration,
    upsert,
)
from elm_sideload.domain.sources import GithubSource, RelativeSource


def _reg(name: str, source) -> SideloadRegistration:
    return SideloadRegistration(
        original_package_name=name,
        original_package_version="1.0.0",
        sideloaded_package=source,
    )


def test_upsert_replaces_entry_for_same_package():
    first = _reg("elm/html", RelativeSource(path="./html"))
    other = _reg("elm/browser", RelativeSource(path="./browser"))
    second = _reg("elm/html", GithubSource(url="https://github.com/me/html", sha="a" * 40))

    config = upsert(upsert(upsert(SideloadConfig(), first), other), second)

    assert [s.original_package_name for s in config.sideloads] == ["elm/browser", "elm/html"]
    assert config.sideloads[-1].sideloaded_package == second.sideloaded_package


def test_upsert_same_registration_twice_is_stable():
    reg = _reg("elm/html", RelativeSource(path="./html"))
    once = upsert(SideloadConfig(), reg)
    twice = upsert(once, reg)
    assert once == twice


def test_config_json_shape():
    config = SideloadConfig(
        sideloads=(_reg("elm/virtual-dom", GithubSource(url="https://github.com/lydell/virtual-dom", sha="b" * 40)),),
    )
    assert config.to_json() == {
        "elmJsonPath": "elm.json",
        "requireElmHome": False,
        "sideloads": [
            {
                "originalPackageName": "elm/virtual-dom",
                "originalPackageVersion": "1.0.0",
                "sideloadedPackage": {
                    "type": "github",
                    "url": "https://github.com/lydell/virtual-dom",
                    "pinTo": {"sha": "b" * 40},
                },
            }
        ],
    }


def test_from_json_reads_packages_path_override():
    config = SideloadConfig.from_json(
        {
            "elmJsonPath": "app/elm.json",
            "requireElmHome": True,
            "elmHomePackagesPath": {"type": "absolute", "path": "/opt/elm/packages"},
            "sideloads": [
                {
                    "originalPackageName": "elm/html",
                    "originalPackageVersion": "1.0.0",
                    "sideloadedPackage": {"type": "relative", "path": "../html"},
                }
            ],
        }
    )
    assert config.elm_json_path == "app/elm.json"
    assert config.require_elm_home is True
    assert config.elm_home_packages_path == PackagesPathOverride(type="absolute", path="/opt/elm/packages")
    assert config.sideloads[0].sideloaded_package == RelativeSource(path="../html")
    assert config.to_json()["elmHomePackagesPath"] == {"type": "absolute", "path": "/opt/elm/packages"}


def test_github_source_describe_uses_short_sha():
    source = GithubSource(url="https://github.com/lydell/virtual-dom", sha="0123456789" + "a" * 30)
    assert source.describe() == "https://github.com/lydell/virtual-dom@0123456"
