"""バリデーションルールの読み込みを行うサービス。"""

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from prmeta.models.errors import RuleConfigError, RuleNotFoundError
from prmeta.models.rule import ValidationRule

logger = logging.getLogger("prmeta.rules")


class RuleService:
    """config_dir/validation-rules/*.yaml からルール定義を読み込む。

    ルールは初回アクセス時に一度だけ読み込まれ、インスタンス内にキャッシュされる。
    """

    def __init__(self, config_dir: Path) -> None:
        self._config_dir = config_dir
        self._rules: dict[str, ValidationRule] | None = None

    def _load_rules(self) -> dict[str, ValidationRule]:
        if self._rules is not None:
            return self._rules

        rules: dict[str, ValidationRule] = {}
        rules_dir = self._config_dir / "validation-rules"
        if not rules_dir.exists():
            logger.warning("Rules directory does not exist: %s", rules_dir)
            self._rules = rules
            return rules

        for rule_file in sorted(rules_dir.glob("*.yaml")):
            for rule in self._read_rule_file(rule_file):
                if rule.id in rules:
                    raise RuleConfigError(rule_file, f"duplicate rule id {rule.id!r}")
                rules[rule.id] = rule
            logger.debug("Loaded rules from %s", rule_file)

        self._rules = rules
        return rules

    @staticmethod
    def _read_rule_file(rule_file: Path) -> list[ValidationRule]:
        try:
            with open(rule_file, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise RuleConfigError(rule_file, str(e)) from e

        if not data or "rules" not in data:
            return []
        if not isinstance(data["rules"], list):
            raise RuleConfigError(rule_file, "'rules' must be a list")

        try:
            return [ValidationRule.model_validate(rule_data) for rule_data in data["rules"]]
        except ValidationError as e:
            raise RuleConfigError(rule_file, str(e)) from e

    def list_rules(self) -> list[ValidationRule]:
        """読み込まれた全ルールをID順で返す。"""
        rules = self._load_rules()
        return [rules[rule_id] for rule_id in sorted(rules)]

    def get_rule(self, rule_id: str) -> ValidationRule:
        """ルールIDに対応するルールを返す。

        Raises:
            RuleNotFoundError: ルールが存在しない場合。
        """
        rule = self._load_rules().get(rule_id)
        if rule is None:
            raise RuleNotFoundError(rule_id)
        return rule
