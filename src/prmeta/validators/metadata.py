"""PRタイトル・ブランチ名のバリデーションロジック。

validate() は純粋関数であり、ログ出力・I/O・状態変更を一切行わない。
同じ入力とルールに対しては常に等価な ValidationResult を返す。
"""

import re
from typing import NamedTuple

from prmeta.models.rule import ValidationRule
from prmeta.models.validation import FailureKind, ValidationInput, ValidationResult


class _Parts(NamedTuple):
    commit_type: str
    ticket: str
    description: str


class _StructureError(Exception):
    """テンプレートの区切り文字が見つからない。"""


def _split_title(text: str) -> _Parts:
    """`type(TICKET): description` 形式を分解する。"""
    open_idx = text.find("(")
    if open_idx < 0:
        raise _StructureError("missing '(' after the type")
    close_idx = text.find(")", open_idx + 1)
    if close_idx < 0:
        raise _StructureError("missing ')' after the ticket reference")
    if text[close_idx + 1 : close_idx + 2] != ":":
        raise _StructureError("missing ':' after the ticket reference")

    remainder = text[close_idx + 2 :]
    return _Parts(text[:open_idx], text[open_idx + 1 : close_idx], remainder.strip())


def _split_branch(text: str, ticket_pattern: str) -> _Parts:
    """`type/TICKET-description` 形式を分解する。

    チケットは '/' 以降でチケットパターンに一致する最長のハイフン区切りプレフィックス。
    一致しない場合は最初の2セグメントを不正なチケットとして返す。
    """
    slash_idx = text.find("/")
    if slash_idx < 0:
        raise _StructureError("missing '/' after the type")
    branch_type, rest = text[:slash_idx], text[slash_idx + 1 :]
    if "-" not in rest:
        raise _StructureError("missing '-' in the ticket reference")

    boundaries = [i for i, ch in enumerate(rest) if ch == "-"]
    boundaries.append(len(rest))
    for end in reversed(boundaries):
        if re.fullmatch(ticket_pattern, rest[:end]):
            return _Parts(branch_type, rest[:end], rest[end + 1 :].strip())

    head, _, tail = rest.partition("-")
    sequence, _, description = tail.partition("-")
    return _Parts(branch_type, f"{head}-{sequence}", description.strip())


def validate(input: ValidationInput, rule: ValidationRule) -> ValidationResult:
    """入力文字列をルールのテンプレートに照らして検証する。

    検査順序は 構造 → タイプ → チケット → 説明。タイプの検査はチケットや
    説明の妥当性に関係なく先に行われる。

    Args:
        input: 検証対象の文字列と除外フラグ。
        rule: 適用するバリデーションルール。

    Returns:
        検証結果。失敗時は違反したサブルールと期待フォーマットを含む。
    """
    if input.exempt:
        return ValidationResult.exemption(rule.id)

    expected = f"Expected format: {rule.expected_format}"
    try:
        if rule.template == "title":
            parts = _split_title(input.text)
        else:
            parts = _split_branch(input.text, rule.ticket_pattern)
    except _StructureError as e:
        return ValidationResult.failure(
            rule.id,
            FailureKind.MALFORMED_STRUCTURE,
            f"Malformed structure in {input.text!r}: {e}. {expected}",
        )

    found = {"commit_type": parts.commit_type, "ticket": parts.ticket, "description": parts.description or None}

    if parts.commit_type not in rule.allowed_types:
        return ValidationResult.failure(
            rule.id,
            FailureKind.INVALID_TYPE,
            f"Invalid type {parts.commit_type!r}: must be one of {', '.join(rule.allowed_types)} "
            f"(case-sensitive). {expected}",
            **found,
        )

    if not re.fullmatch(rule.ticket_pattern, parts.ticket):
        return ValidationResult.failure(
            rule.id,
            FailureKind.INVALID_TICKET_FORMAT,
            f"Invalid ticket reference {parts.ticket!r}: must match {rule.ticket_pattern} "
            f"(e.g. PROJ-123). {expected}",
            **found,
        )

    if not parts.description:
        return ValidationResult.failure(
            rule.id,
            FailureKind.MISSING_DESCRIPTION,
            f"Missing description after ticket {parts.ticket!r}. {expected}",
            **found,
        )

    return ValidationResult.success(rule.id, **found)
