"""ValidationResult / GateReport モデルのユニットテスト。"""

from prmeta.models.event import GateReport
from prmeta.models.validation import FailureKind, ValidationResult


class TestValidationResult:
    def test_success(self) -> None:
        result = ValidationResult.success("pr-title", commit_type="feat", ticket="A-1", description="x")
        assert result.passed is True
        assert result.commit_type == "feat"
        assert result.kind is None
        assert result.exempted is False

    def test_exemption(self) -> None:
        result = ValidationResult.exemption("pr-title")
        assert result.passed is True
        assert result.exempted is True

    def test_failure(self) -> None:
        result = ValidationResult.failure("pr-title", FailureKind.INVALID_TYPE, "bad type")
        assert result.passed is False
        assert result.kind == "invalid_type"
        assert result.message == "bad type"

    def test_failure_kind_serializes_as_value(self) -> None:
        result = ValidationResult.failure("b", FailureKind.MISSING_DESCRIPTION, "m")
        assert result.model_dump(mode="json")["kind"] == "missing_description"


class TestGateReport:
    def test_empty_report_passes(self) -> None:
        assert GateReport().passed is True

    def test_failures(self) -> None:
        ok = ValidationResult.success("pr-title")
        ng = ValidationResult.failure("branch-name", FailureKind.MALFORMED_STRUCTURE, "m")
        report = GateReport(actor="octocat", results=[ok, ng])
        assert report.passed is False
        assert report.failures == [ng]
