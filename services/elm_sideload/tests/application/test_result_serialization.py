from elm_sideload.application.diagnostic_catalog import diagnostic
from elm_sideload.application.result_serialization import serialize_result
from elm_sideload.domain.changes import AppliedChange, ExecutionReport
from elm_sideload.domain.diagnostics import PackageLocation
from elm_sideload.domain.result import Result


def test_serialize_result_includes_message_and_artifacts():
    change = AppliedChange(package_name="elm/html", action="sideloaded", source="./html")
    result = Result(
        value=ExecutionReport(message="Successfully installed 1 sideloads", changes=[change]),
        artifacts=[change.to_json()],
    )
    payload = serialize_result(result, command="install", args=["--always"])
    assert payload["result_schema_version"] == 1
    assert payload["command"] == "install"
    assert payload["args"] == ["--always"]
    assert payload["exit_code"] == 0
    assert payload["message"] == "Successfully installed 1 sideloads"
    assert payload["artifacts"] == [{"packageName": "elm/html", "action": "sideloaded", "source": "./html"}]
    assert "timestamp" in payload


def test_serialize_diagnostic_location():
    result = Result(diagnostics=[diagnostic("SHA_NOT_FOUND", location=PackageLocation("elm/html", "1.0.0"))])
    payload = serialize_result(result, command="install", args=[])
    diag = payload["diagnostics"][0]
    assert payload["exit_code"] == 1
    assert payload["message"] is None
    assert diag["code"] == "SHA_NOT_FOUND"
    assert diag["severity"] == "error"
    assert diag["location"] == {"kind": "package", "package": "elm/html", "version": "1.0.0"}
