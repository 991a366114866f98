"""Staged synthesis of the whole configuration tree.

Stages run strictly in order and every stage that depends on an earlier
artifact reads it back from disk:

1. CLAUDE.md (project context)
2. recommendation
3. merge with the base items
4. agents, 5. agents/README.md
6. skills, 7. skills/README.md
8. commands (with both READMEs as context), 9. commands/README.md
10. development guide
"""

import logging
from pathlib import Path
from typing import Callable, Iterable, Optional
from pydantic import BaseModel, Field
from ..config import DEFAULT_CONFIG_DIR
from ..llm.provider import LLMProvider, ProviderError
from ..models import BASE_ITEMS, ProjectProfile, Recommendation
from ..scanner.project_context import ProjectContextAnalyzer
from ..templates.resolver import TemplateResolver
from .artifacts import (
    CLAUDE_MD,
    KIND_DIRS,
    ArtifactGenerator,
    artifact_path,
    classify_skill,
    strip_code_fence,
)
from .composer import PromptComposer
from .frontmatter import parse_agent, parse_command, parse_skill
from .naming import merge_unique
from .readme import render_agents_readme, render_commands_readme, render_skills_readme
from .recommendation import RecommendationEngine


logger = logging.getLogger(__name__)

ALL_KINDS = ("agents", "skills", "commands", "guides")
README_NAME = "README.md"
DEVELOPMENT_GUIDE_NAME = "development_guide.md"


class PipelineResult(BaseModel):
    """What one pipeline run wrote and what it had to skip."""

    recommendation: Optional[Recommendation] = None
    agents: list[Path] = Field(default_factory=list)
    skills: list[Path] = Field(default_factory=list)
    commands: list[Path] = Field(default_factory=list)
    readmes: list[Path] = Field(default_factory=list)
    guides: list[Path] = Field(default_factory=list)
    failures: list[str] = Field(default_factory=list)

    @property
    def written(self) -> list[Path]:
        return self.guides + self.agents + self.skills + self.commands + self.readmes

    def fail(self, item: str, error: Exception) -> None:
        logger.warning("Failed to generate %s: %s", item, error)
        self.failures.append(f"{item}: {error}")


def merge_with_base(recommendation: Recommendation) -> Recommendation:
    """Union of the recommendation and the mandatory base items, base first."""
    return Recommendation(
        agents=merge_unique(recommendation.agents, BASE_ITEMS.agents),
        commands=merge_unique(recommendation.commands, BASE_ITEMS.commands),
        skills=merge_unique(recommendation.skills, BASE_ITEMS.skills),
        description=recommendation.description,
    )


def normalize_kinds(kinds: Optional[Iterable[str]]) -> tuple[str, ...]:
    """Validate a kind selection; empty or None selects every kind."""
    selected = tuple(kinds or ())
    if not selected:
        return ALL_KINDS
    unknown = [kind for kind in selected if kind not in ALL_KINDS]
    if unknown:
        raise ValueError(f"unknown artifact kinds: {', '.join(unknown)}")
    return tuple(kind for kind in ALL_KINDS if kind in selected)


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return ""


class SynthesisPipeline:
    """Runs the ten generation stages for one project."""

    def __init__(
        self,
        llm_provider: LLMProvider,
        profile: ProjectProfile,
        project_path: Path,
        output_dir: Optional[Path] = None,
        resolver: Optional[TemplateResolver] = None,
        kinds: Optional[Iterable[str]] = None,
    ):
        """Initialize pipeline.

        Args:
            llm_provider: Provider for every AI call of the run
            profile: Validated project profile
            project_path: Project root; CLAUDE.md is written here
            output_dir: Root of the generated tree, ``<project>/.claude`` by default
            resolver: External template resolver
            kinds: Subset of ``agents, skills, commands, guides``; all when empty
        """
        self.llm = llm_provider
        self.profile = profile
        self.project_path = project_path
        self.output_dir = output_dir or project_path / DEFAULT_CONFIG_DIR
        self.kinds = normalize_kinds(kinds)
        self.generator = ArtifactGenerator(
            llm_provider, profile, project_path, self.output_dir, resolver=resolver
        )
        self.composer = PromptComposer(profile, llm_provider.provider_id)
        self.context_analyzer = ProjectContextAnalyzer(project_path, profile.documentation_dirs)

    @property
    def claude_md_path(self) -> Path:
        return self.project_path / CLAUDE_MD

    def readme_path(self, kind: str) -> Path:
        return self.output_dir / KIND_DIRS[kind] / README_NAME

    @property
    def development_guide_path(self) -> Path:
        return self.output_dir / DEVELOPMENT_GUIDE_NAME

    def run(self, recommendation: Optional[Recommendation] = None) -> PipelineResult:
        """Execute every selected stage in order.

        Individual artifact failures are recorded and logged; the run always
        reaches the last stage.

        Args:
            recommendation: Skip stage 2 and use this recommendation instead

        Returns:
            PipelineResult
        """
        result = PipelineResult()
        self.output_dir.mkdir(parents=True, exist_ok=True)

        # 1. Project context
        project_context = self.context_analyzer.analyze()
        if "guides" in self.kinds:
            self._generate_claude_md(project_context, result)

        # 2. Recommendation, 3. merge
        if recommendation is None:
            logger.info("Requesting recommendation from %s", self.llm.provider_id or "provider")
            engine = RecommendationEngine(self.llm, self.composer)
            recommendation = engine.recommend(self.profile, self.generator.system_prompt())
        merged = merge_with_base(recommendation)
        result.recommendation = merged

        if "agents" in self.kinds:
            # 4. Agents, 5. agents README
            self._generate_items("agent", merged.agents, result.agents, result)
            self._write_readme(
                "agent",
                render_agents_readme(self.profile.name, self._parse(parse_agent, result.agents)),
                result,
            )

        if "skills" in self.kinds:
            # 6. Skills, 7. skills README
            self._generate_items("skill", merged.skills, result.skills, result)
            self._write_readme(
                "skill",
                render_skills_readme(self.profile.name, self._parse(parse_skill, result.skills)),
                result,
            )

        if "commands" in self.kinds:
            # 8. Commands with README context, 9. commands README
            agents_context = _read_text(self.readme_path("agent"))
            skills_context = _read_text(self.readme_path("skill"))
            for name in merged.commands:
                try:
                    path = self.generator.generate_command(name, agents_context, skills_context)
                except (ProviderError, OSError, ValueError) as e:
                    result.fail(f"command {name}", e)
                    continue
                result.commands.append(path)

            self._write_readme(
                "command",
                render_commands_readme(self.profile.name, self._parse(parse_command, result.commands)),
                result,
            )

        if "guides" in self.kinds:
            # 10. Development guide
            self._generate_development_guide(project_context, merged.commands, result)

        logger.info(
            "Generation finished: %d files written, %d failures",
            len(result.written),
            len(result.failures),
        )
        return result

    def _generate_claude_md(self, project_context: str, result: PipelineResult) -> None:
        logger.info("Generating %s", CLAUDE_MD)
        try:
            output = self.llm.send(
                self.generator.system_prompt(), self.composer.claude_md_prompt(project_context)
            )
            if not output.strip():
                raise ProviderError("empty response")
            self.claude_md_path.write_text(strip_code_fence(output), encoding="utf-8")
        except (ProviderError, OSError, ValueError) as e:
            logger.warning("Could not generate %s, continuing without project context: %s", CLAUDE_MD, e)
            result.failures.append(f"{CLAUDE_MD}: {e}")
            return
        result.guides.append(self.claude_md_path)

    def _generate_items(self, kind: str, names: list[str], written: list[Path], result: PipelineResult) -> None:
        logger.info("Generating %d %ss", len(names), kind)
        for name in names:
            try:
                written.append(self.generator.generate(kind, name))
            except (ProviderError, OSError, ValueError) as e:
                result.fail(f"{kind} {name}", e)

    @staticmethod
    def _parse(parser: Callable, paths: list[Path]) -> list:
        records = []
        for path in paths:
            try:
                records.append(parser(path))
            except OSError as e:
                logger.warning("Could not read %s: %s", path, e)
        return records

    def _write_readme(self, kind: str, content: str, result: PipelineResult) -> None:
        path = self.readme_path(kind)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        except OSError as e:
            result.fail(f"{KIND_DIRS[kind]}/{README_NAME}", e)
            return
        result.readmes.append(path)

    def _generate_development_guide(
        self, project_context: str, commands: list[str], result: PipelineResult
    ) -> None:
        logger.info("Generating %s", DEVELOPMENT_GUIDE_NAME)
        prompt = self.composer.development_guide_prompt(
            project_context,
            _read_text(self.readme_path("agent")),
            _read_text(self.readme_path("skill")),
            commands,
        )
        try:
            output = self.llm.send(self.generator.system_prompt(), prompt)
            if not output.strip():
                raise ProviderError("empty response")
            self.development_guide_path.write_text(strip_code_fence(output), encoding="utf-8")
        except (ProviderError, OSError, ValueError) as e:
            result.fail(DEVELOPMENT_GUIDE_NAME, e)
            return
        result.guides.append(self.development_guide_path)


def plan_paths(
    profile: ProjectProfile,
    project_path: Path,
    recommendation: Recommendation,
    output_dir: Optional[Path] = None,
    kinds: Optional[Iterable[str]] = None,
) -> list[Path]:
    """Files a run with ``recommendation`` would write, in stage order.

    Nothing is sent to a provider, which makes this suitable for dry runs.
    """
    output_dir = output_dir or project_path / DEFAULT_CONFIG_DIR
    kinds = normalize_kinds(kinds)
    merged = merge_with_base(recommendation)

    paths: list[Path] = []
    if "guides" in kinds:
        paths.append(project_path / CLAUDE_MD)

    sections = (
        ("agents", "agent", merged.agents),
        ("skills", "skill", merged.skills),
        ("commands", "command", merged.commands),
    )
    for selection, kind, names in sections:
        if selection not in kinds:
            continue
        for name in names:
            category = classify_skill(name, profile) if kind == "skill" else ""
            paths.append(artifact_path(output_dir, kind, name, category))
        paths.append(output_dir / KIND_DIRS[kind] / README_NAME)

    if "guides" in kinds:
        paths.append(output_dir / DEVELOPMENT_GUIDE_NAME)
    return paths
