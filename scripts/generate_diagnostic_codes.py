#!/usr/bin/env python3
from __future__ import annotations

from pathlib import Path
from typing import TypeGuard

import yaml


REPO_ROOT = Path(__file__).resolve().parents[1]
CATALOG = Path("services") / "elm_sideload" / "src" / "elm_sideload" / "diagnostics" / "codes.yaml"


def _is_dict(value: object) -> TypeGuard[dict[object, object]]:
    return isinstance(value, dict)


def _is_list(value: object) -> TypeGuard[list[object]]:
    return isinstance(value, list)


def _as_dict(value: object) -> dict[str, object]:
    if not _is_dict(value):
        return {}
    return {str(k): v for k, v in value.items()}


def _load_yaml(path: Path) -> dict[str, object]:
    raw: object = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    return _as_dict(raw)


def _render_generated_notice(command: str) -> str:
    return "\n".join(
        [
            "> **Generated file. Do not edit directly.**",
            f"> Run: `{command}`",
        ]
    )


def _rule_group(rule: str) -> str:
    return rule.split(".", 1)[0]


def generate(repo_root: Path = REPO_ROOT) -> Path:
    src = repo_root / CATALOG
    out = repo_root / "docs" / "reference" / "diagnostic-codes.md"

    if not src.exists():
        raise SystemExit(f"Diagnostics source not found: {src}")

    data = _load_yaml(src)
    if data.get("version") != 1:
        raise SystemExit(f"Unsupported diagnostics version: {data.get('version')}")

    raw_codes = data.get("codes")
    if not _is_list(raw_codes):
        raise SystemExit("Invalid codes.yaml: expected top-level 'codes' list")
    codes: list[dict[str, object]] = []
    for entry in raw_codes:
        if not _is_dict(entry):
            raise SystemExit("Invalid codes.yaml: entries must be mappings")
        codes.append(_as_dict(entry))

    lines: list[str] = [
        _render_generated_notice("python scripts/generate_diagnostic_codes.py"),
        "",
        "# Diagnostic codes",
        "",
        f"This page is generated from `{CATALOG.as_posix()}`.",
        "Every error elm-sideload reports carries one of these codes; any error exits with status 1.",
    ]

    groups: dict[str, list[dict[str, object]]] = {}
    for item in codes:
        code = str(item.get("code") or "").strip()
        sev = str(item.get("severity") or "").strip()
        rule = str(item.get("rule") or "").strip()
        if not code or not sev or not rule:
            raise SystemExit(f"Invalid diagnostic entry (missing required fields): {item}")
        groups.setdefault(_rule_group(rule), []).append(item)

    for group in sorted(groups):
        lines.extend(["", f"## {group}", "", "| Code | Severity | Rule | Message | Hint |", "|---|---|---|---|---|"])
        for item in sorted(groups[group], key=lambda x: str(x.get("code", ""))):
            msg = str(item.get("message") or "").strip().replace("\n", " ")
            hint = str(item.get("hint") or "").strip().replace("\n", " ")
            lines.append(
                f"| `{item['code']}` | `{item['severity']}` | `{item['rule']}` | {msg} | {hint} |"
            )

    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text("\n".join(lines) + "\n", encoding="utf-8")
    print(f"Generated {out}")
    return out


if __name__ == "__main__":
    generate()
