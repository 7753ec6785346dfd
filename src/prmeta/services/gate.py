"""CIイベントのメタデータ検証を統括するサービス。"""

import logging

from prmeta.models.errors import EventPayloadError
from prmeta.models.event import GateReport, PullRequestEvent
from prmeta.models.validation import ValidationInput, ValidationResult
from prmeta.services.rules import RuleService
from prmeta.validators.metadata import validate

logger = logging.getLogger("prmeta.gate")


class GateService:
    """アクターの除外判定とルール適用を行い、パイプラインの合否を決める。"""

    def __init__(
        self,
        rule_service: RuleService,
        exempt_actors: list[str],
        title_rule: str = "pr-title",
        branch_rule: str = "branch-name",
    ) -> None:
        self._rule_service = rule_service
        self._exempt_actors = {a.lower() for a in exempt_actors}
        self._title_rule = title_rule
        self._branch_rule = branch_rule

    def is_exempt(self, actor: str | None) -> bool:
        """アクター名が除外リストに一致するか（大文字小文字を区別しない完全一致）。"""
        return actor is not None and actor.lower() in self._exempt_actors

    def check(self, rule_id: str, text: str, actor: str | None = None) -> ValidationResult:
        """指定ルールで文字列を検証する。

        Raises:
            RuleNotFoundError: ルールが存在しない場合。
        """
        rule = self._rule_service.get_rule(rule_id)
        exempt = self.is_exempt(actor)
        if exempt:
            logger.info("Skipping %s check for exempt actor %s", rule_id, actor)

        result = validate(ValidationInput(text=text, exempt=exempt), rule)
        if not result.passed:
            logger.info("%s check failed (%s): %s", rule_id, result.kind, result.message)
        return result

    def check_title(self, title: str, actor: str | None = None) -> ValidationResult:
        return self.check(self._title_rule, title, actor)

    def check_branch(self, branch: str, actor: str | None = None) -> ValidationResult:
        return self.check(self._branch_rule, branch, actor)

    def check_event(self, event: PullRequestEvent) -> GateReport:
        """イベントのタイトルとブランチ名をまとめて検証する。

        Raises:
            EventPayloadError: タイトルもブランチ名も含まれない場合。
        """
        if event.title is None and event.head_ref is None:
            raise EventPayloadError("neither a pull request title nor a head branch is available")

        results: list[ValidationResult] = []
        if event.title is not None:
            results.append(self.check_title(event.title, event.actor))
        if event.head_ref is not None:
            results.append(self.check_branch(event.head_ref, event.actor))

        return GateReport(actor=event.actor, exempt=self.is_exempt(event.actor), results=results)
