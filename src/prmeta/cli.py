"""prmetaのコマンドラインインターフェース。"""

import logging
import os
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import click
from pydantic import ValidationError
from pydantic_settings import SettingsError

from prmeta.ci.github import (
    format_annotation,
    load_event,
    report_outputs,
    write_outputs,
    write_summary,
)
from prmeta.config import ValidatorConfig
from prmeta.models.errors import PrmetaError
from prmeta.models.validation import ValidationResult
from prmeta.services.gate import GateService
from prmeta.services.rules import RuleService


class ConfigurationError(click.ClickException):
    """設定・入力の不備。検証失敗(1)と区別するため終了コード2を返す。"""

    exit_code = 2


@contextmanager
def _translate_errors() -> Iterator[None]:
    try:
        yield
    except PrmetaError as e:
        raise ConfigurationError(str(e)) from e


_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def setup_logging(level: str) -> None:
    if level.upper() not in _LOG_LEVELS:
        raise ConfigurationError(f"Unknown log level {level!r}: expected one of {', '.join(_LOG_LEVELS)}")
    logging.basicConfig(stream=sys.stderr, level=level.upper(), format="%(levelname)s %(name)s: %(message)s")


def _in_github_actions() -> bool:
    return os.environ.get("GITHUB_ACTIONS") == "true"


def _echo_result(result: ValidationResult) -> None:
    if result.passed:
        suffix = " (exempt)" if result.exempted else ""
        click.echo(f"✓ {result.rule_id}{suffix}")
        return
    if _in_github_actions():
        click.echo(format_annotation(result))
    click.echo(f"✗ {result.rule_id}: {result.message}", err=True)


@click.group()
@click.option(
    "--config-dir",
    type=click.Path(exists=True, file_okay=False, dir_okay=True, path_type=Path),
    default=None,
    help="Directory containing validation-rules/*.yaml",
)
@click.option(
    "--log-level",
    type=click.Choice(_LOG_LEVELS, case_sensitive=False),
    default=None,
    help="Logging level (default: PRMETA_LOG_LEVEL or WARNING)",
)
@click.pass_context
def cli(ctx: click.Context, config_dir: Path | None, log_level: str | None) -> None:
    """Validate pull request titles and branch names."""
    overrides = {"config_dir": config_dir} if config_dir is not None else {}
    try:
        config = ValidatorConfig(**overrides)
    except (ValidationError, SettingsError) as e:
        raise ConfigurationError(f"Invalid PRMETA_* settings: {e}") from e
    setup_logging(log_level or config.log_level)

    rule_service = RuleService(config_dir=config.config_dir)
    ctx.obj = GateService(
        rule_service,
        exempt_actors=config.exempt_actors,
        title_rule=config.title_rule,
        branch_rule=config.branch_rule,
    )
    ctx.meta["rule_service"] = rule_service
    ctx.meta["config"] = config


@cli.command()
@click.argument("text")
@click.option("--actor", default=None, help="Author of the pull request")
@click.option("--rule", "rule_id", default=None, help="Rule id (default: PRMETA_TITLE_RULE)")
@click.pass_obj
def title(gate: GateService, text: str, actor: str | None, rule_id: str | None) -> None:
    """Validate a pull request title."""
    with _translate_errors():
        result = gate.check(rule_id, text, actor) if rule_id else gate.check_title(text, actor)
    _echo_result(result)
    if not result.passed:
        sys.exit(1)


@cli.command()
@click.argument("text")
@click.option("--actor", default=None, help="Author of the pull request")
@click.option("--rule", "rule_id", default=None, help="Rule id (default: PRMETA_BRANCH_RULE)")
@click.pass_obj
def branch(gate: GateService, text: str, actor: str | None, rule_id: str | None) -> None:
    """Validate a branch name."""
    with _translate_errors():
        result = gate.check(rule_id, text, actor) if rule_id else gate.check_branch(text, actor)
    _echo_result(result)
    if not result.passed:
        sys.exit(1)


@cli.command()
@click.option(
    "--event-path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="GitHub event payload (default: $GITHUB_EVENT_PATH)",
)
@click.pass_obj
def event(gate: GateService, event_path: Path | None) -> None:
    """Validate the title and head branch of a GitHub pull request event."""
    with _translate_errors():
        report = gate.check_event(load_event(event_path))

    for result in report.results:
        _echo_result(result)
    write_outputs(report_outputs(report))
    write_summary(report)
    if not report.passed:
        sys.exit(1)


@cli.command()
@click.pass_context
def rules(ctx: click.Context) -> None:
    """List configured validation rules."""
    rule_service: RuleService = ctx.meta["rule_service"]
    with _translate_errors():
        configured = rule_service.list_rules()
    if not configured:
        click.echo(f"No rules found in {ctx.meta['config'].config_dir}")
        return
    for rule in configured:
        click.echo(f"{rule.id} [{rule.template}] {rule.expected_format}")
        click.echo(f"  types: {', '.join(rule.allowed_types)}")
        click.echo(f"  ticket: {rule.ticket_pattern}")
