"""CIイベントとゲート判定結果のデータモデル。"""

from pydantic import BaseModel, Field

from prmeta.models.validation import ValidationResult


class PullRequestEvent(BaseModel):
    """CIをトリガーしたプルリクエストのメタデータ。"""

    title: str | None = None
    head_ref: str | None = None
    actor: str | None = None


class GateReport(BaseModel):
    """単一イベントに対する全ルールの検証結果。"""

    actor: str | None = None
    exempt: bool = False
    results: list[ValidationResult] = Field(default_factory=list)

    @property
    def passed(self) -> bool:
        return all(r.passed for r in self.results)

    @property
    def failures(self) -> list[ValidationResult]:
        return [r for r in self.results if not r.passed]
