from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


def _str_map(value: object) -> dict[str, str]:
    if not isinstance(value, dict):
        return {}
    return {str(k): str(v) for k, v in value.items()}


@dataclass(frozen=True)
class ElmJson:
    direct: dict[str, str] = field(default_factory=dict)
    indirect: dict[str, str] = field(default_factory=dict)
    test_direct: dict[str, str] = field(default_factory=dict)
    test_indirect: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_json(cls, raw: dict[str, Any]) -> "ElmJson":
        deps = raw.get("dependencies")
        deps = deps if isinstance(deps, dict) else {}
        # elm.json keeps test-dependencies at the top level; older tooling nested it.
        test_deps = raw.get("test-dependencies", deps.get("test-dependencies"))
        test_deps = test_deps if isinstance(test_deps, dict) else {}
        return cls(
            direct=_str_map(deps.get("direct")),
            indirect=_str_map(deps.get("indirect")),
            test_direct=_str_map(test_deps.get("direct")),
            test_indirect=_str_map(test_deps.get("indirect")),
        )

    def buckets(self) -> list[dict[str, str]]:
        # Lookup order: direct, indirect, test direct, test indirect.
        return [self.direct, self.indirect, self.test_direct, self.test_indirect]

    def package_version(self, name: str) -> str | None:
        for bucket in self.buckets():
            if name in bucket:
                return bucket[name]
        return None

    def has_package(self, name: str) -> bool:
        return self.package_version(name) is not None
