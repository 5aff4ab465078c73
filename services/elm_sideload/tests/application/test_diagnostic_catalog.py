from pathlib import Path

import pytest

from elm_sideload.adapters.errors import ShaNotFound
from elm_sideload.application.diagnostic_catalog import diagnostic, from_error, load_catalog
from elm_sideload.domain.diagnostics import Severity
from elm_sideload.domain.environment import Environment, resolve_packages_root
from elm_sideload.domain.naming import validate_package_name
from elm_sideload.domain.registry import SideloadConfig


def test_catalog_fills_rule_severity_and_hint():
    diag = diagnostic("NO_SIDELOAD_CONFIG_FOUND")
    assert diag.severity is Severity.ERROR
    assert diag.rule == "precondition.config"
    assert diag.message
    assert diag.hint and "init" in diag.hint


def test_informational_codes():
    catalog = load_catalog()
    assert catalog["INSTALL_DECLINED"].severity is Severity.INFO
    assert catalog["ELM_HOME_RESOLVED"].severity is Severity.INFO


def test_from_error_keeps_details():
    err = ShaNotFound("Commit abc not found", details={"recent_commits": ["abc1234 init"]})
    diag = from_error(err)
    assert diag.code == "SHA_NOT_FOUND"
    assert diag.message == "Commit abc not found"
    assert diag.details == {"recent_commits": ["abc1234 init"]}


@pytest.mark.parametrize(
    "diag",
    [
        validate_package_name("not-a-package")[0],
        resolve_packages_root(
            Environment(cwd=Path("/work"), home=Path("/home/dev"), platform="linux"),
            SideloadConfig(require_elm_home=True),
        ).diagnostics[0],
    ],
    ids=lambda d: d.code,
)
def test_domain_diagnostics_agree_with_catalog(diag):
    entry = load_catalog()[diag.code]
    assert diag.rule == entry.rule
    assert diag.severity is entry.severity
    assert diag.hint == entry.hint
