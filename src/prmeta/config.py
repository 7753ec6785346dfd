"""prmetaの設定管理。"""

from pathlib import Path

from pydantic_settings import BaseSettings

_PACKAGE_ROOT = Path(__file__).parent
_REPO_ROOT = _PACKAGE_ROOT.parent.parent


class ValidatorConfig(BaseSettings):
    """バリデーター設定。環境変数から読み込み可能。"""

    model_config = {"env_prefix": "PRMETA_"}

    config_dir: Path = _REPO_ROOT / "config"
    log_level: str = "WARNING"

    # 検証をスキップする自動化アクター（依存関係更新Botなど）
    exempt_actors: list[str] = ["dependabot[bot]", "renovate[bot]"]

    # イベント検証で使うルールID
    title_rule: str = "pr-title"
    branch_rule: str = "branch-name"
