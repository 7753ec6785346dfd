"""GateServiceのユニットテスト。"""

import logging

import pytest

from prmeta.models.errors import EventPayloadError, RuleNotFoundError
from prmeta.models.event import PullRequestEvent
from prmeta.models.validation import FailureKind
from prmeta.services.gate import GateService
from prmeta.services.rules import RuleService


class TestExemption:
    @pytest.mark.parametrize("actor", ["dependabot[bot]", "Dependabot[bot]", "renovate[bot]"])
    def test_exempt_actors(self, gate_service: GateService, actor: str) -> None:
        assert gate_service.is_exempt(actor) is True

    @pytest.mark.parametrize("actor", [None, "octocat", "dependabot", "not-dependabot[bot]"])
    def test_regular_actors(self, gate_service: GateService, actor: str | None) -> None:
        assert gate_service.is_exempt(actor) is False

    def test_custom_exempt_list(self, rule_service: RuleService) -> None:
        gate = GateService(rule_service, exempt_actors=["release-bot"])
        assert gate.is_exempt("release-bot") is True
        assert gate.is_exempt("dependabot[bot]") is False


class TestChecks:
    def test_check_title(self, gate_service: GateService) -> None:
        result = gate_service.check_title("feat(PROJECT-123): Add OAuth2 authentication", actor="octocat")
        assert result.passed is True
        assert result.rule_id == "pr-title"

    def test_check_branch(self, gate_service: GateService) -> None:
        result = gate_service.check_branch("feature/ABC-1-login", actor="octocat")
        assert result.passed is False
        assert result.rule_id == "branch-name"
        assert result.kind == FailureKind.INVALID_TYPE

    def test_exempt_actor_skips(self, gate_service: GateService) -> None:
        result = gate_service.check_title("Bump requests from 2.31 to 2.32", actor="dependabot[bot]")
        assert result.passed is True
        assert result.exempted is True

    def test_unknown_rule(self, gate_service: GateService) -> None:
        with pytest.raises(RuleNotFoundError):
            gate_service.check("nope", "feat(A-1): x")

    def test_failure_is_logged(self, gate_service: GateService, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO, logger="prmeta.gate"):
            gate_service.check_title("refactor: cleanup")
        assert "malformed_structure" in caplog.text


class TestCheckEvent:
    def test_both_checks(self, gate_service: GateService) -> None:
        event = PullRequestEvent(
            title="fix(OPS-9): handle timeouts",
            head_ref="fix/OPS-9-handle-timeouts",
            actor="octocat",
        )
        report = gate_service.check_event(event)
        assert report.passed is True
        assert [r.rule_id for r in report.results] == ["pr-title", "branch-name"]
        assert report.exempt is False

    def test_partial_failure(self, gate_service: GateService) -> None:
        event = PullRequestEvent(title="fix(OPS-9): handle timeouts", head_ref="hotfix-timeouts")
        report = gate_service.check_event(event)
        assert report.passed is False
        assert [r.rule_id for r in report.failures] == ["branch-name"]

    def test_title_only(self, gate_service: GateService) -> None:
        report = gate_service.check_event(PullRequestEvent(title="docs(DOC-1): readme"))
        assert [r.rule_id for r in report.results] == ["pr-title"]

    def test_exempt_event(self, gate_service: GateService) -> None:
        event = PullRequestEvent(
            title="Bump pydantic from 2.7 to 2.8",
            head_ref="dependabot/pip/pydantic-2.8",
            actor="dependabot[bot]",
        )
        report = gate_service.check_event(event)
        assert report.passed is True
        assert report.exempt is True
        assert all(r.exempted for r in report.results)

    def test_empty_event(self, gate_service: GateService) -> None:
        with pytest.raises(EventPayloadError):
            gate_service.check_event(PullRequestEvent(actor="octocat"))
