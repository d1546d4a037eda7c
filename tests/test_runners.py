import json
import subprocess
from pathlib import Path

import pytest
from botocore.exceptions import ClientError

from sbomgate.core.errors import ToolInvocationError
from sbomgate.core.targets import ScanTarget, TargetCategory
from sbomgate.runners import cyclonedx_npm, inspector


def test_root_command_has_no_error_tolerance(tmp_path: Path):
    command = cyclonedx_npm.build_command(TargetCategory.ROOT, tmp_path / "out.json")
    assert command[0] == "cyclonedx-npm"
    assert command[command.index("--omit") + 1] == "dev"
    assert "--output-reproducible" in command
    assert command[command.index("--spec-version") + 1] == "1.5"
    assert command[command.index("--output-file") + 1] == str(tmp_path / "out.json")
    assert "--ignore-npm-errors" not in command


def test_non_root_command_tolerates_npm_errors(tmp_path: Path):
    command = cyclonedx_npm.build_command(TargetCategory.NON_ROOT, tmp_path / "out.json")
    assert command[-1] == "--ignore-npm-errors"


def test_generate_runs_inside_target_directory(tmp_path: Path):
    calls = []
    output = tmp_path / "out" / "src_remote.sbom.json"

    def fake_run(command, cwd, check, capture_output, text):
        calls.append((command, cwd))
        output.write_text("{}")
        return subprocess.CompletedProcess(command, 0, stdout="", stderr="")

    target = ScanTarget("src/remote", TargetCategory.NON_ROOT)
    assert cyclonedx_npm.generate(target, tmp_path, output, run=fake_run) == output
    assert calls[0][1] == tmp_path / "src" / "remote"


def test_generate_failure_raises(tmp_path: Path):
    def fake_run(command, **_kwargs):
        return subprocess.CompletedProcess(command, 1, stdout="", stderr="npm ERR! missing: left-pad")

    target = ScanTarget("src", TargetCategory.ROOT)
    with pytest.raises(ToolInvocationError) as excinfo:
        cyclonedx_npm.generate(target, tmp_path, tmp_path / "x.json", run=fake_run)
    assert "left-pad" in str(excinfo.value)
    assert excinfo.value.target == "src"


def test_generate_missing_executable_raises(tmp_path: Path):
    def fake_run(command, **_kwargs):
        raise FileNotFoundError(command[0])

    with pytest.raises(ToolInvocationError):
        cyclonedx_npm.generate(ScanTarget("src", TargetCategory.ROOT), tmp_path, tmp_path / "x.json", run=fake_run)


def test_generate_without_output_file_raises(tmp_path: Path):
    def fake_run(command, **_kwargs):
        return subprocess.CompletedProcess(command, 0, stdout="", stderr="")

    with pytest.raises(ToolInvocationError):
        cyclonedx_npm.generate(ScanTarget("src", TargetCategory.ROOT), tmp_path, tmp_path / "x.json", run=fake_run)


class DummyInspectorClient:
    def __init__(self, response=None, error=None) -> None:
        self.response = response
        self.error = error
        self.calls = []

    def scan_sbom(self, sbom, outputFormat):  # noqa: N803 (boto style)
        self.calls.append((sbom, outputFormat))
        if self.error:
            raise self.error
        return self.response


def test_scan_sbom_writes_response_without_metadata(tmp_path: Path):
    sbom_path = tmp_path / "src.sbom.json"
    sbom_path.write_text(json.dumps({"bomFormat": "CycloneDX", "specVersion": "1.5"}))
    client = DummyInspectorClient(
        response={
            "sbom": {"vulnerability_count": {"critical": 1}},
            "ResponseMetadata": {"HTTPStatusCode": 200},
        }
    )
    result_path = tmp_path / "src.scan-result.json"

    inspector.scan_sbom(sbom_path, result_path, "src", client=client)

    assert client.calls == [({"bomFormat": "CycloneDX", "specVersion": "1.5"}, "INSPECTOR")]
    assert json.loads(result_path.read_text()) == {"sbom": {"vulnerability_count": {"critical": 1}}}


def test_scan_sbom_client_error_raises(tmp_path: Path):
    sbom_path = tmp_path / "src.sbom.json"
    sbom_path.write_text("{}")
    error = ClientError({"Error": {"Code": "AccessDenied", "Message": "nope"}}, "ScanSbom")
    with pytest.raises(ToolInvocationError):
        inspector.scan_sbom(sbom_path, tmp_path / "r.json", "src", client=DummyInspectorClient(error=error))
    assert not (tmp_path / "r.json").exists()


def test_scan_sbom_unreadable_sbom_raises(tmp_path: Path):
    sbom_path = tmp_path / "broken.sbom.json"
    sbom_path.write_text("not json")
    with pytest.raises(ToolInvocationError):
        inspector.scan_sbom(sbom_path, tmp_path / "r.json", "src", client=DummyInspectorClient(response={}))


def test_generate_unwritable_output_dir_raises(tmp_path: Path):
    blocker = tmp_path / "out"
    blocker.write_text("not a directory")

    def fake_run(command, **_kwargs):  # pragma: no cover - never reached
        return subprocess.CompletedProcess(command, 0, stdout="", stderr="")

    with pytest.raises(ToolInvocationError) as excinfo:
        cyclonedx_npm.generate(
            ScanTarget("src", TargetCategory.ROOT), tmp_path, blocker / "src.sbom.json", run=fake_run
        )
    assert excinfo.value.tool == "cyclonedx-npm"


def test_scan_sbom_unwritable_result_path_raises(tmp_path: Path):
    sbom_path = tmp_path / "src.sbom.json"
    sbom_path.write_text("{}")
    blocker = tmp_path / "results"
    blocker.write_text("not a directory")
    client = DummyInspectorClient(response={"sbom": {"vulnerability_count": {}}})

    with pytest.raises(ToolInvocationError, match="could not write"):
        inspector.scan_sbom(sbom_path, blocker / "src.scan-result.json", "src", client=client)
