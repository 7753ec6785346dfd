"""prmetaのカスタム例外クラス。

バリデーション違反そのものは例外ではなく ValidationResult として返す。
ここで定義するのは設定不備や入力ペイロード欠落などの運用エラーのみ。
"""

from pathlib import Path


class PrmetaError(Exception):
    """prmetaの基底例外クラス。"""


class RuleNotFoundError(PrmetaError):
    """指定されたルールIDが設定に存在しない場合の例外。"""

    def __init__(self, rule_id: str) -> None:
        super().__init__(f"Validation rule not found: {rule_id}")
        self.rule_id = rule_id


class RuleConfigError(PrmetaError):
    """ルール定義ファイルの読み込み・検証に失敗した場合の例外。"""

    def __init__(self, path: Path, detail: str) -> None:
        super().__init__(f"Invalid rule configuration in {path}: {detail}")
        self.path = path
        self.detail = detail


class EventPayloadError(PrmetaError):
    """CIイベントペイロードが欠落・不正な場合の例外。"""

    def __init__(self, detail: str) -> None:
        super().__init__(f"Invalid CI event payload: {detail}")
        self.detail = detail
