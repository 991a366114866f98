"""Synthesis of individual agent, skill and command files."""

import logging
import re
from pathlib import Path
from typing import Optional
from ..llm.provider import LLMProvider, ProviderError
from ..models import BASE_ITEMS, ProjectProfile
from ..templates.bank import EmbeddedTemplateBank
from ..templates.resolver import TemplateResolver
from .composer import PromptComposer, build_system_prompt
from .naming import sanitize


logger = logging.getLogger(__name__)

CLAUDE_MD = "CLAUDE.md"

KIND_DIRS = {
    "agent": "agents",
    "skill": "skills",
    "command": "commands",
}

_FENCE_OPEN = re.compile(r"^```(?:markdown|md)?\s*$", re.IGNORECASE)


def strip_code_fence(text: str) -> str:
    """Unwrap a response that is one Markdown code fence around the whole document."""
    stripped = text.strip()
    lines = stripped.splitlines()
    if len(lines) >= 2 and _FENCE_OPEN.match(lines[0]) and lines[-1].strip() == "```":
        return "\n".join(lines[1:-1]).strip() + "\n"
    return stripped + "\n"


def read_project_context(project_path: Path) -> str:
    """Current CLAUDE.md contents, or an empty string when absent."""
    path = project_path / CLAUDE_MD
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return ""


def classify_skill(name: str, profile: ProjectProfile) -> str:
    """Pick the skills subdirectory for ``name``.

    Base skills go to ``base``; a name matching the project language goes to
    ``language``; a name contained in the framework goes to ``framework``;
    anything else defaults to ``language``.
    """
    if name in BASE_ITEMS.skills:
        return "base"

    language = profile.language
    if name.lower() == language.lower() or name == sanitize(language):
        return "language"

    framework = profile.framework
    if framework and (name.lower() in framework.lower() or name == sanitize(framework)):
        return "framework"

    return "language"


def artifact_path(output_dir: Path, kind: str, name: str, category: str = "") -> Path:
    """``<output_dir>/<kind-dir>[/<category>]/<sanitized-name>.md``."""
    directory = output_dir / KIND_DIRS[kind]
    if kind == "skill":
        directory = directory / (category or "language")
    return directory / f"{sanitize(name)}.md"


class ArtifactGenerator:
    """Produces one artifact file per call.

    The strategy is chosen per artifact: commands that receive README context
    always go to the provider; otherwise an external template wins over an
    embedded one, and the provider is the last resort.
    """

    def __init__(
        self,
        llm_provider: LLMProvider,
        profile: ProjectProfile,
        project_path: Path,
        output_dir: Path,
        resolver: Optional[TemplateResolver] = None,
    ):
        """Initialize generator.

        Args:
            llm_provider: Provider used for AI generation
            profile: Target project
            project_path: Project root, where CLAUDE.md lives
            output_dir: Root of the generated tree (usually ``<project>/.claude``)
            resolver: External template resolver; probing the working directory when omitted
        """
        self.llm = llm_provider
        self.profile = profile
        self.project_path = project_path
        self.output_dir = output_dir
        self.resolver = resolver if resolver is not None else TemplateResolver()
        self.bank = EmbeddedTemplateBank(profile)
        self.composer = PromptComposer(profile, llm_provider.provider_id)

    def system_prompt(self) -> str:
        """System prompt with the project context read from disk at call time."""
        return build_system_prompt(read_project_context(self.project_path))

    def classify_skill(self, name: str) -> str:
        return classify_skill(name, self.profile)

    def output_path(self, kind: str, name: str, category: str = "") -> Path:
        if kind == "skill" and not category:
            category = self.classify_skill(name)
        return artifact_path(self.output_dir, kind, name, category)

    def _external_template(self, kind: str, name: str, category: str) -> Optional[str]:
        candidates = [f"{category}/{name}", name] if kind == "skill" and category else [name]
        for candidate in candidates:
            if self.resolver.has_template(kind, candidate):
                logger.debug("Using external %s template %s", kind, candidate)
                content = self.resolver.load_template(kind, candidate)
                return self.resolver.adapt(kind, content, self.profile)
        return None

    def _prompt(self, kind: str, name: str, category: str, agents_context: str, skills_context: str) -> str:
        if kind == "agent":
            return self.composer.agent_prompt(name)
        if kind == "skill":
            return self.composer.skill_prompt(name, category)
        return self.composer.command_prompt(name, agents_context, skills_context)

    def synthesize(
        self,
        kind: str,
        name: str,
        category: str = "",
        agents_context: str = "",
        skills_context: str = "",
    ) -> str:
        """Produce the content of one artifact without writing it.

        Raises:
            ProviderError: If AI generation is needed and fails
        """
        with_context = kind == "command" and bool(agents_context or skills_context)

        if not with_context:
            content = self._external_template(kind, name, category)
            if content is not None:
                return content

            content = self.bank.render(kind, name, category)
            if content is not None:
                logger.debug("Using embedded %s template for %s", kind, name)
                return content

        logger.debug("Generating %s %s with %s", kind, name, self.llm.provider_id or "provider")
        prompt = self._prompt(kind, name, category, agents_context, skills_context)
        output = self.llm.send(self.system_prompt(), prompt)
        if not output.strip():
            raise ProviderError(f"empty response for {kind} {name}")
        return strip_code_fence(output)

    def generate(
        self,
        kind: str,
        name: str,
        category: str = "",
        agents_context: str = "",
        skills_context: str = "",
    ) -> Path:
        """Synthesize and write one artifact, overwriting any previous file.

        Args:
            kind: ``agent``, ``skill`` or ``command``
            name: Artifact name; sanitized for the file name
            category: Skill subdirectory; classified from the name when empty
            agents_context: agents/README.md contents (commands only)
            skills_context: skills/README.md contents (commands only)

        Returns:
            Path of the written file

        Raises:
            ProviderError: If AI generation fails
            OSError: If the file cannot be written
        """
        if kind not in KIND_DIRS:
            raise ValueError(f"unknown artifact kind: {kind}")

        if kind == "skill" and not category:
            category = self.classify_skill(name)

        content = self.synthesize(kind, name, category, agents_context, skills_context)

        path = self.output_path(kind, name, category)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        logger.debug("Wrote %s", path)
        return path

    def generate_agent(self, name: str) -> Path:
        return self.generate("agent", name)

    def generate_skill(self, name: str, category: str = "") -> Path:
        return self.generate("skill", name, category)

    def generate_command(self, name: str, agents_context: str = "", skills_context: str = "") -> Path:
        return self.generate("command", name, agents_context=agents_context, skills_context=skills_context)
