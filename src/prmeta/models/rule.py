"""バリデーションルール定義のデータモデル。"""

import re
from re import _parser
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, field_validator

DEFAULT_TICKET_PATTERN = r"[A-Z][A-Z0-9]*-[0-9]+"

CONVENTIONAL_TYPES: tuple[str, ...] = (
    "feat",
    "fix",
    "chore",
    "docs",
    "test",
    "refactor",
    "perf",
    "ci",
    "build",
    "style",
    "revert",
)

Template = Literal["title", "branch"]

_FORMATS: dict[str, str] = {
    "title": "<type>(<TICKET-123>): <description>",
    "branch": "<type>/<TICKET-123>-<description>",
}

_REPEATS = (_parser.MAX_REPEAT, _parser.MIN_REPEAT, _parser.POSSESSIVE_REPEAT)


def _has_nested_repeat(items: Any, inside_repeat: bool = False) -> bool:
    """複数回繰り返される部分パターンの中に、さらに量指定子があるか。"""
    for op, av in items:
        if op in _REPEATS:
            _, max_count, sub = av
            if inside_repeat or _has_nested_repeat(sub, max_count > 1):
                return True
        elif op is _parser.SUBPATTERN:
            if _has_nested_repeat(av[-1], inside_repeat):
                return True
        elif op is _parser.BRANCH:
            if any(_has_nested_repeat(branch, inside_repeat) for branch in av[1]):
                return True
        elif op in (_parser.ASSERT, _parser.ASSERT_NOT):
            if _has_nested_repeat(av[1], inside_repeat):
                return True
        elif op is _parser.ATOMIC_GROUP:
            if _has_nested_repeat(av, inside_repeat):
                return True
    return False


class ValidationRule(BaseModel):
    """PRメタデータの検証ルール（YAMLから読み込み）。

    許可されたコミットタイプ、チケットIDパターン、構造テンプレートの組。
    インスタンス生成後は不変。
    """

    model_config = ConfigDict(frozen=True)

    id: str
    description: str = ""
    template: Template
    allowed_types: tuple[str, ...] = CONVENTIONAL_TYPES
    ticket_pattern: str = DEFAULT_TICKET_PATTERN

    @field_validator("allowed_types")
    @classmethod
    def _check_allowed_types(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if not value:
            raise ValueError("allowed_types must not be empty")
        if any(not t or t != t.strip() for t in value):
            raise ValueError("allowed_types must not contain blank or padded entries")
        duplicates = sorted({t for t in value if value.count(t) > 1})
        if duplicates:
            raise ValueError(f"allowed_types contains duplicates: {', '.join(duplicates)}")
        return value

    @field_validator("ticket_pattern")
    @classmethod
    def _check_ticket_pattern(cls, value: str) -> str:
        try:
            compiled = re.compile(value)
        except re.error as e:
            raise ValueError(f"ticket_pattern is not a valid regular expression: {e}") from e
        if compiled.groups:
            raise ValueError("ticket_pattern must not contain capture groups")
        if compiled.fullmatch(""):
            raise ValueError("ticket_pattern must not match an empty string")
        if _has_nested_repeat(_parser.parse(value)):
            raise ValueError("ticket_pattern must not contain nested quantifiers")
        return value

    @property
    def expected_format(self) -> str:
        """診断メッセージに添える期待フォーマット。"""
        return _FORMATS[self.template]
