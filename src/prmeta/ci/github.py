"""GitHub Actions との入出力アダプター。

イベントペイロードの読み込み、ステップ出力・ワークフローアノテーション・
ステップサマリーの書き出しを担当する。
"""

import json
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from prmeta.models.errors import EventPayloadError
from prmeta.models.event import GateReport, PullRequestEvent
from prmeta.models.validation import ValidationResult


def _env(env: Mapping[str, str] | None) -> Mapping[str, str]:
    return os.environ if env is None else env


def _as_object(value: Any, field: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise EventPayloadError(f"{field} must be a JSON object, got {type(value).__name__}")
    return value


def load_event(event_path: Path | None = None, env: Mapping[str, str] | None = None) -> PullRequestEvent:
    """GitHubイベントペイロードからPRメタデータを取り出す。

    pull_request を含まないイベントでは GITHUB_HEAD_REF / GITHUB_ACTOR にフォールバックする。

    Args:
        event_path: イベントJSONのパス。Noneの場合は GITHUB_EVENT_PATH を使用。
        env: 環境変数。Noneの場合は os.environ を使用。

    Raises:
        EventPayloadError: ペイロードが存在しない、JSONとして読めない、または構造が想定と異なる場合。
    """
    env = _env(env)
    if event_path is None:
        raw_path = env.get("GITHUB_EVENT_PATH")
        if not raw_path:
            raise EventPayloadError("GITHUB_EVENT_PATH is not set")
        event_path = Path(raw_path)

    try:
        payload: Any = json.loads(event_path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise EventPayloadError(f"event file not found: {event_path}") from e
    except json.JSONDecodeError as e:
        raise EventPayloadError(f"event file is not valid JSON: {e}") from e

    payload = _as_object(payload, "event payload")
    pull_request = _as_object(payload.get("pull_request"), "pull_request")
    head = _as_object(pull_request.get("head"), "pull_request.head")
    user = _as_object(pull_request.get("user"), "pull_request.user")

    try:
        return PullRequestEvent(
            title=pull_request.get("title"),
            head_ref=head.get("ref") or env.get("GITHUB_HEAD_REF") or None,
            actor=user.get("login") or env.get("GITHUB_ACTOR") or None,
        )
    except ValidationError as e:
        raise EventPayloadError(f"unexpected field types: {e}") from e


def _escape_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def _escape_property(value: str) -> str:
    return _escape_data(value).replace(":", "%3A").replace(",", "%2C")


def format_annotation(result: ValidationResult) -> str:
    """失敗結果を ::error ワークフローコマンドに整形する。"""
    title = f"{result.rule_id} {result.kind}" if result.kind else result.rule_id
    return f"::error title={_escape_property(title)}::{_escape_data(result.message)}"


def report_outputs(report: GateReport) -> dict[str, str]:
    outputs = {"valid": "true" if report.passed else "false"}
    for result in report.results:
        outputs[result.rule_id] = "pass" if result.passed else "fail"
    return outputs


def write_outputs(outputs: Mapping[str, str], env: Mapping[str, str] | None = None) -> bool:
    """GITHUB_OUTPUT にステップ出力を追記する。未設定なら何もせず False を返す。"""
    output_path = _env(env).get("GITHUB_OUTPUT")
    if not output_path:
        return False
    with open(output_path, "a", encoding="utf-8") as f:
        for key, value in outputs.items():
            f.write(f"{key}={value}\n")
    return True


def render_summary(report: GateReport) -> str:
    """ステップサマリー用のMarkdownを生成する。"""
    lines = ["### Pull request metadata", ""]
    if report.exempt:
        lines.append(f"Checks skipped for exempt actor `{report.actor}`.")
        lines.append("")
    lines.append("| Rule | Result | Details |")
    lines.append("| --- | --- | --- |")
    for result in report.results:
        status = "✅ pass" if result.passed else f"❌ {result.kind}"
        details = result.message.replace("|", "\\|")
        lines.append(f"| `{result.rule_id}` | {status} | {details} |")
    return "\n".join(lines) + "\n"


def write_summary(report: GateReport, env: Mapping[str, str] | None = None) -> bool:
    """GITHUB_STEP_SUMMARY にサマリーを追記する。未設定なら False を返す。"""
    summary_path = _env(env).get("GITHUB_STEP_SUMMARY")
    if not summary_path:
        return False
    with open(summary_path, "a", encoding="utf-8") as f:
        f.write(render_summary(report))
    return True
