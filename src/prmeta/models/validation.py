"""バリデーション関連のデータモデル。"""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict


class FailureKind(StrEnum):
    """違反したサブルールの種別。"""

    INVALID_TYPE = "invalid_type"
    INVALID_TICKET_FORMAT = "invalid_ticket_format"
    MISSING_DESCRIPTION = "missing_description"
    MALFORMED_STRUCTURE = "malformed_structure"


class ValidationInput(BaseModel):
    """検証対象の文字列（PRタイトルまたはブランチ名）。"""

    model_config = ConfigDict(frozen=True)

    text: str
    exempt: bool = False


class ValidationResult(BaseModel):
    """単一入力に対する検証結果。"""

    model_config = ConfigDict(frozen=True)

    passed: bool
    rule_id: str
    kind: FailureKind | None = None
    message: str = ""
    exempted: bool = False
    commit_type: str | None = None
    ticket: str | None = None
    description: str | None = None

    @classmethod
    def success(
        cls,
        rule_id: str,
        *,
        commit_type: str | None = None,
        ticket: str | None = None,
        description: str | None = None,
    ) -> "ValidationResult":
        return cls(
            passed=True,
            rule_id=rule_id,
            message="OK",
            commit_type=commit_type,
            ticket=ticket,
            description=description,
        )

    @classmethod
    def exemption(cls, rule_id: str) -> "ValidationResult":
        return cls(passed=True, rule_id=rule_id, exempted=True, message="Skipped: exempt actor")

    @classmethod
    def failure(
        cls,
        rule_id: str,
        kind: FailureKind,
        message: str,
        *,
        commit_type: str | None = None,
        ticket: str | None = None,
        description: str | None = None,
    ) -> "ValidationResult":
        return cls(
            passed=False,
            rule_id=rule_id,
            kind=kind,
            message=message,
            commit_type=commit_type,
            ticket=ticket,
            description=description,
        )
