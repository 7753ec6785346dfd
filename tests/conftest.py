"""テスト共通フィクスチャ。"""

from pathlib import Path

import pytest

from prmeta.config import ValidatorConfig
from prmeta.models.rule import ValidationRule
from prmeta.services.gate import GateService
from prmeta.services.rules import RuleService

_GITHUB_ENV_VARS = (
    "GITHUB_ACTIONS",
    "GITHUB_ACTOR",
    "GITHUB_EVENT_PATH",
    "GITHUB_HEAD_REF",
    "GITHUB_OUTPUT",
    "GITHUB_STEP_SUMMARY",
)


@pytest.fixture(autouse=True)
def _isolate_ci_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """ランナー上で実行してもCI環境変数の影響を受けないようにする。"""
    for name in _GITHUB_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    for name in ("PRMETA_CONFIG_DIR", "PRMETA_EXEMPT_ACTORS", "PRMETA_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def config_dir() -> Path:
    """設定ファイルディレクトリ。"""
    return Path(__file__).parent.parent / "config"


@pytest.fixture
def title_rule() -> ValidationRule:
    """デフォルトのPRタイトルルール。"""
    return ValidationRule(id="pr-title", template="title")


@pytest.fixture
def branch_rule() -> ValidationRule:
    """デフォルトのブランチ名ルール。"""
    return ValidationRule(id="branch-name", template="branch")


@pytest.fixture
def rule_service(config_dir: Path) -> RuleService:
    """テスト用RuleService。"""
    return RuleService(config_dir=config_dir)


@pytest.fixture
def gate_service(rule_service: RuleService) -> GateService:
    """テスト用GateService。"""
    config = ValidatorConfig()
    return GateService(rule_service, exempt_actors=config.exempt_actors)
