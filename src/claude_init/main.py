"""Main CLI entry point for claude-init."""

import json
import logging
import shutil
from pathlib import Path
from typing import Optional
import click
from click.shell_completion import get_completion_class
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from . import __version__
from .analyzer.repository_analyzer import AnalysisError, RepositoryAnalyzer
from .config import Config, GlobalConfig, ProviderConfig
from .generator.pipeline import PipelineResult, SynthesisPipeline, plan_paths
from .generator.recommendation import default_recommendation
from .llm import (
    PROVIDERS,
    ConfigurationError,
    LLMProvider,
    ProviderError,
    available_providers,
    create_provider,
)
from .models import ProjectProfile
from .project import load_profile, save_profile
from .survey import run_survey
from .templates.resolver import TemplateResolver


PROG_NAME = "claude-init"
COMPLETE_VAR = "_CLAUDE_INIT_COMPLETE"
SUPPORTED_SHELLS = ["bash", "zsh", "fish"]


def configure_logging(verbose: bool, level: str = "INFO") -> None:
    """Route package logs through a rich handler on stderr."""
    logger = logging.getLogger("claude_init")
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(console=Console(stderr=True), show_path=False, show_time=False)
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else getattr(logging, level.upper(), logging.INFO))


def mask_key(key: str) -> str:
    if not key:
        return "(not set)"
    if len(key) <= 8:
        return "*" * len(key)
    return f"{key[:4]}...{key[-4:]}"


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool):
    """claude-init - Bootstrap an AI-assisted development configuration."""
    config = Config.from_env()
    configure_logging(verbose, config.log_level)
    ctx.obj = config


def _load_global_config() -> GlobalConfig:
    try:
        return GlobalConfig.load()
    except ValueError as e:
        raise click.ClickException(str(e)) from e


def _prompt_api_key(global_config: GlobalConfig, provider_id: str) -> None:
    """Ask for a missing API key and persist it."""
    descriptor = PROVIDERS[provider_id]
    click.echo(f"🔑 {descriptor.display_name} is not configured.")
    if descriptor.api_key_url:
        click.echo(f"   Get an API key at {descriptor.api_key_url}")

    api_key = click.prompt(f"{descriptor.display_name} API key", hide_input=True).strip()
    settings = global_config.providers.get(provider_id, ProviderConfig())
    global_config.set_provider_config(provider_id, settings.model_copy(update={"api_key": api_key}))
    path = global_config.save()
    click.echo(f"   Saved to {path}")


def _build_provider(config: Config, provider_id: str, interactive: bool) -> LLMProvider:
    global_config = _load_global_config()
    if provider_id not in PROVIDERS:
        raise click.ClickException(f"invalid provider: {provider_id}")

    if interactive and not global_config.is_configured(provider_id):
        _prompt_api_key(global_config, provider_id)

    try:
        return create_provider(provider_id, global_config=global_config, config=config)
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e


def _resolver(config: Config) -> TemplateResolver:
    extra = [config.templates_dir] if config.templates_dir else []
    return TemplateResolver(extra_paths=extra)


def _print_plan(paths: list[Path], project_path: Path) -> None:
    click.echo("\n📋 Dry run - files that would be written:")
    for path in paths:
        try:
            shown = path.relative_to(project_path)
        except ValueError:
            shown = path
        click.echo(f"   - {shown}")


def _print_summary(result: PipelineResult, project_path: Path) -> None:
    table = Table(title="Generated configuration")
    table.add_column("Kind")
    table.add_column("Files", justify="right")
    table.add_row("Agents", str(len(result.agents)))
    table.add_row("Skills", str(len(result.skills)))
    table.add_row("Commands", str(len(result.commands)))
    table.add_row("READMEs", str(len(result.readmes)))
    table.add_row("Guides", str(len(result.guides)))
    Console().print(table)

    if result.failures:
        click.echo(f"\n⚠️  {len(result.failures)} item(s) could not be generated:")
        for failure in result.failures:
            click.echo(f"   - {failure}")

    click.echo(f"\n✅ Configuration generated in {project_path}")


def _run_pipeline(
    llm: LLMProvider,
    profile: ProjectProfile,
    project_path: Path,
    output_dir: Path,
    resolver: TemplateResolver,
    kinds: Optional[list[str]] = None,
) -> PipelineResult:
    click.echo(f"\n📝 Generating configuration with {llm.provider_id}...")
    pipeline = SynthesisPipeline(
        llm, profile, project_path, output_dir=output_dir, resolver=resolver, kinds=kinds
    )
    with llm:
        result = pipeline.run()
    _print_summary(result, project_path)
    return result


@cli.command()
@click.argument("project_path", default=".", type=click.Path(file_okay=False))
@click.option("--force", "-f", is_flag=True, help="Remove an existing configuration directory first")
@click.option("--dry-run", is_flag=True, help="Show what would be generated without writing files")
@click.option("--config-dir", default=None, help="Configuration directory name (default: .claude)")
@click.option(
    "--provider",
    "-p",
    type=click.Choice(available_providers()),
    default=None,
    help="AI provider to use (default: the configured one)",
)
@click.option("--existing/--new", default=None, help="Whether the project already has code")
@click.pass_obj
def init(
    config: Config,
    project_path: str,
    force: bool,
    dry_run: bool,
    config_dir: Optional[str],
    provider: Optional[str],
    existing: Optional[bool],
):
    """Initialize the AI-assisted development configuration for a project.

    Examples:
        # New project in the current directory
        claude-init init --new

        # Existing codebase, analyzed with the Gemini API
        claude-init init ./my-service --existing --provider gemini
    """
    path = Path(project_path).resolve()
    config_dir = config_dir or config.config_dir

    if path.exists() and not path.is_dir():
        raise click.ClickException(f"project path is not a directory: {path}")
    if not path.exists():
        if existing:
            raise click.ClickException(f"project path does not exist: {path}")
        if not dry_run:
            path.mkdir(parents=True)

    target = path / config_dir
    if target.exists():
        if not force:
            raise click.ClickException(
                f"config directory already exists: {target} (use --force to overwrite)"
            )
        if not dry_run:
            click.echo(f"🗑️  Removing existing {target}")
            shutil.rmtree(target)

    provider_id = provider or _load_global_config().provider
    llm = _build_provider(config, provider_id, interactive=True)

    if not dry_run and not llm.is_available():
        raise click.ClickException(
            f"provider {provider_id} is not available "
            f"(run '{PROG_NAME} config --provider {provider_id}')"
        )
    click.echo(f"✓ Using {PROVIDERS[provider_id].display_name}")

    if existing is None:
        has_files = path.exists() and any(entry for entry in path.iterdir() if entry.name != config_dir)
        existing = click.confirm("Is this an existing project?", default=has_files)
    origin = "existing" if existing else "new"

    prefill = None
    if existing and not dry_run:
        click.echo(f"\n🔍 Analyzing repository: {path}")
        try:
            prefill = RepositoryAnalyzer(llm).analyze(path)
            click.echo(f"   Detected: {prefill.language} / {prefill.framework or 'no framework'}")
        except (ProviderError, AnalysisError) as e:
            click.echo(f"   ⚠️  Analysis failed, continuing without a draft: {e}")

    click.echo("")
    try:
        profile = run_survey(path, origin=origin, provider_id=provider_id, prefill=prefill)
    except ValidationError as e:
        raise click.ClickException(f"invalid project profile: {e}") from e

    output_dir = path / config_dir
    if dry_run:
        _print_plan(plan_paths(profile, path, default_recommendation(profile), output_dir), path)
        return

    saved = save_profile(profile, path, config_dir)
    click.echo(f"\n💾 Project profile saved to {saved}")

    _run_pipeline(llm, profile, path, output_dir, _resolver(config))


@cli.command()
@click.argument("project_path", default=".", type=click.Path(exists=True, file_okay=False))
@click.option("--force", "-f", is_flag=True, help="Overwrite previously generated artifacts")
@click.option("--dry-run", is_flag=True, help="Show what would be generated without writing files")
@click.option("--output-dir", type=click.Path(file_okay=False), default=None, help="Output directory")
@click.option("--only-agents", is_flag=True, help="Generate only agents")
@click.option("--only-skills", is_flag=True, help="Generate only skills")
@click.option("--only-commands", is_flag=True, help="Generate only commands")
@click.option("--only-guides", is_flag=True, help="Generate only CLAUDE.md and the development guide")
@click.pass_obj
def generate(
    config: Config,
    project_path: str,
    force: bool,
    dry_run: bool,
    output_dir: Optional[str],
    only_agents: bool,
    only_skills: bool,
    only_commands: bool,
    only_guides: bool,
):
    """Regenerate artifacts from the saved project profile.

    Examples:
        claude-init generate --force
        claude-init generate --only-agents --only-skills
        claude-init generate --dry-run
    """
    path = Path(project_path).resolve()

    try:
        profile = load_profile(path, config.config_dir)
    except (FileNotFoundError, ValueError, ValidationError) as e:
        raise click.ClickException(str(e)) from e

    out = Path(output_dir).resolve() if output_dir else path / config.config_dir
    kinds = [
        kind
        for kind, selected in (
            ("agents", only_agents),
            ("skills", only_skills),
            ("commands", only_commands),
            ("guides", only_guides),
        )
        if selected
    ]

    if dry_run:
        _print_plan(plan_paths(profile, path, default_recommendation(profile), out, kinds), path)
        return

    existing = [out / name for name in ("agents", "skills", "commands") if (out / name).exists()]
    if existing and not force:
        raise click.ClickException(
            f"artifacts already exist in {out} (use --force to overwrite)"
        )

    llm = _build_provider(config, profile.provider_id, interactive=False)
    _run_pipeline(llm, profile, path, out, _resolver(config), kinds)


@cli.command("config")
@click.option("--provider", "-p", type=click.Choice(available_providers()), default=None, help="Provider to configure")
@click.option("--api-key", default=None, help="API key for the provider")
@click.option("--base-url", default=None, help="Override the provider endpoint")
@click.option("--model", default=None, help="Override the provider model")
@click.option("--max-tokens", type=int, default=None, help="Override the max tokens budget")
@click.option("--show", is_flag=True, help="Print the current configuration")
def config_command(
    provider: Optional[str],
    api_key: Optional[str],
    base_url: Optional[str],
    model: Optional[str],
    max_tokens: Optional[int],
    show: bool,
):
    """Configure the default AI provider and its credentials."""
    global_config = _load_global_config()

    if show:
        click.echo(f"Config file: {GlobalConfig.path()}")
        click.echo(f"Default provider: {global_config.provider}")
        for provider_id in available_providers():
            if provider_id == "cli":
                continue
            settings = global_config.get_provider_config(provider_id)
            click.echo(f"\n[{provider_id}]")
            click.echo(f"  api_key: {mask_key(settings.api_key)}")
            if settings.base_url:
                click.echo(f"  base_url: {settings.base_url}")
            if settings.model:
                click.echo(f"  model: {settings.model}")
            if settings.max_tokens:
                click.echo(f"  max_tokens: {settings.max_tokens}")
        return

    if provider is None:
        provider = click.prompt(
            "Provider", type=click.Choice(available_providers()), default=global_config.provider
        )

    descriptor = PROVIDERS[provider]
    if descriptor.requires_api_key:
        settings = global_config.providers.get(provider, ProviderConfig())
        if api_key is None and not settings.is_configured():
            if descriptor.api_key_url:
                click.echo(f"Get an API key at {descriptor.api_key_url}")
            api_key = click.prompt(f"{descriptor.display_name} API key", hide_input=True)

        updates = {
            key: value
            for key, value in (
                ("api_key", api_key.strip() if api_key else None),
                ("base_url", base_url),
                ("model", model),
                ("max_tokens", max_tokens),
            )
            if value is not None
        }
        global_config.set_provider_config(provider, settings.model_copy(update=updates))

    global_config.provider = provider
    path = global_config.save()
    click.echo(f"✅ Default provider set to {descriptor.display_name} ({path})")


@cli.command()
@click.argument("shell", type=click.Choice(SUPPORTED_SHELLS))
def completion(shell: str):
    """Print the shell completion script for SHELL.

    Examples:
        eval "$(claude-init completion bash)"
    """
    completion_class = get_completion_class(shell)
    click.echo(completion_class(cli, {}, PROG_NAME, COMPLETE_VAR).source())


@cli.command()
@click.option("--short", is_flag=True, help="Print only the version number")
@click.option("--json", "as_json", is_flag=True, help="Print version information as JSON")
def version(short: bool, as_json: bool):
    """Show version information."""
    if as_json:
        click.echo(json.dumps({"name": PROG_NAME, "version": __version__}))
    elif short:
        click.echo(__version__)
    else:
        click.echo(f"{PROG_NAME} version {__version__}")


if __name__ == "__main__":
    cli()
