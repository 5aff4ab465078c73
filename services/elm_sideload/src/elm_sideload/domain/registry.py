from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Literal

from elm_sideload.domain.sources import GithubSource, RelativeSource, SideloadSource

DEFAULT_ELM_JSON_PATH = "elm.json"


@dataclass(frozen=True)
class PackagesPathOverride:
    type: Literal["relative", "absolute"]
    path: str


@dataclass(frozen=True)
class SideloadRegistration:
    original_package_name: str
    original_package_version: str
    sideloaded_package: SideloadSource

    def to_json(self) -> dict[str, Any]:
        return {
            "originalPackageName": self.original_package_name,
            "originalPackageVersion": self.original_package_version,
            "sideloadedPackage": self.sideloaded_package.to_json(),
        }


@dataclass(frozen=True)
class SideloadConfig:
    elm_json_path: str = DEFAULT_ELM_JSON_PATH
    require_elm_home: bool = False
    sideloads: tuple[SideloadRegistration, ...] = field(default_factory=tuple)
    elm_home_packages_path: PackagesPathOverride | None = None

    def to_json(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "elmJsonPath": self.elm_json_path,
            "requireElmHome": self.require_elm_home,
        }
        if self.elm_home_packages_path is not None:
            data["elmHomePackagesPath"] = {
                "type": self.elm_home_packages_path.type,
                "path": self.elm_home_packages_path.path,
            }
        data["sideloads"] = [s.to_json() for s in self.sideloads]
        return data

    @classmethod
    def from_json(cls, raw: dict[str, Any]) -> "SideloadConfig":
        """Build a config from an already schema-validated document."""
        packages_path = raw.get("elmHomePackagesPath")
        return cls(
            elm_json_path=str(raw.get("elmJsonPath", DEFAULT_ELM_JSON_PATH)),
            require_elm_home=bool(raw.get("requireElmHome", False)),
            sideloads=tuple(_registration_from_json(item) for item in raw.get("sideloads", [])),
            elm_home_packages_path=(
                PackagesPathOverride(type=packages_path["type"], path=str(packages_path["path"]))
                if isinstance(packages_path, dict)
                else None
            ),
        )


def _registration_from_json(raw: dict[str, Any]) -> SideloadRegistration:
    package = raw["sideloadedPackage"]
    source: SideloadSource
    if package["type"] == "github":
        source = GithubSource(url=str(package["url"]), sha=str(package["pinTo"]["sha"]))
    else:
        source = RelativeSource(path=str(package["path"]))
    return SideloadRegistration(
        original_package_name=str(raw["originalPackageName"]),
        original_package_version=str(raw["originalPackageVersion"]),
        sideloaded_package=source,
    )


def upsert(config: SideloadConfig, registration: SideloadRegistration) -> SideloadConfig:
    """Return a new config where ``registration`` replaces any entry for the same package."""
    kept = tuple(
        s
        for s in config.sideloads
        if s.original_package_name != registration.original_package_name
    )
    return replace(config, sideloads=(*kept, registration))
