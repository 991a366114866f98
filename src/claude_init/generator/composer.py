"""Prompt composition for artifacts, recommendations and guides."""

from ..llm.prompts import (
    AGENT_PROMPT,
    BASE_SYSTEM_PROMPT,
    CLAUDE_MD_PROMPT,
    COMMAND_CONTEXT_SECTION,
    COMMAND_PROMPT,
    DEVELOPMENT_GUIDE_PROMPT,
    PROJECT_CONTEXT_BLOCK,
    PROJECT_DETAILS,
    PROVIDER_COMMAND_AUGMENTATIONS,
    RECOMMENDATION_PROMPT,
    SKILL_PROMPT,
)
from ..models import ProjectProfile
from ..templates.authoring import load_guide
from ..templates.bank import EmbeddedTemplateBank


def _bullets(items: list[str]) -> str:
    return "\n".join(f"  - {item}" for item in items)


def build_system_prompt(claude_md: str = "") -> str:
    """Base system prompt, extended with the project context file when present."""
    if not claude_md.strip():
        return BASE_SYSTEM_PROMPT
    return BASE_SYSTEM_PROMPT + "\n\n" + PROJECT_CONTEXT_BLOCK.format(claude_md=claude_md)


class PromptComposer:
    """Builds user prompts for one project and one provider."""

    def __init__(self, profile: ProjectProfile, provider_id: str = ""):
        self.profile = profile
        self.provider_id = provider_id
        self.bank = EmbeddedTemplateBank(profile)

    def project_details(self) -> str:
        return PROJECT_DETAILS.format(
            language=self.profile.language,
            framework=self.profile.framework,
            architecture=self.profile.architecture,
            description=self.profile.description,
        )

    def agent_prompt(self, name: str) -> str:
        return AGENT_PROMPT.format(
            agent_name=name,
            project_name=self.profile.name,
            project_details=self.project_details(),
            role=self.bank.role_description(name),
            responsibilities=_bullets(self.bank.role_responsibilities(name)),
            guidelines=_bullets(self.bank.role_guidelines()),
            tools=_bullets(self.bank.agent_tools(name).split(", ")),
            guide=load_guide("agent"),
        )

    def skill_prompt(self, name: str, category: str) -> str:
        return SKILL_PROMPT.format(
            category=category,
            skill_name=name,
            project_name=self.profile.name,
            project_details=self.project_details(),
            description=self.bank.skill_description(name),
            title=self.bank.skill_title(name),
            guide=load_guide("skill"),
        )

    def command_prompt(self, name: str, agents_context: str = "", skills_context: str = "") -> str:
        """Compose the command prompt.

        When README context is supplied the model is told to pick agents and
        skills only from those lists, and any augmentation registered for the
        current provider is appended.

        Args:
            name: Sanitized command name
            agents_context: Contents of agents/README.md
            skills_context: Contents of skills/README.md

        Returns:
            Prompt text
        """
        prompt = COMMAND_PROMPT.format(
            command_name=name,
            project_name=self.profile.name,
            project_details=self.project_details(),
            description=self.bank.command_description(name),
            usage=self.bank.command_usage(name),
            flow=self.bank.command_flow(name),
            guide=load_guide("command"),
        )

        if agents_context or skills_context:
            prompt += "\n\n" + COMMAND_CONTEXT_SECTION.format(
                agents_context=agents_context.strip() or "(none)",
                skills_context=skills_context.strip() or "(none)",
            )

            augmentation = PROVIDER_COMMAND_AUGMENTATIONS.get(self.provider_id)
            if augmentation:
                prompt += "\n\n" + augmentation

        return prompt

    def recommendation_prompt(self) -> str:
        return RECOMMENDATION_PROMPT.format(
            name=self.profile.name,
            description=self.profile.description,
            language=self.profile.language,
            framework=self.profile.framework,
            architecture=self.profile.architecture,
            database=self.profile.database,
            category=self.profile.category,
            business_context=self.profile.business_context,
        )

    def claude_md_prompt(self, project_context: str) -> str:
        return CLAUDE_MD_PROMPT.format(
            name=self.profile.name,
            description=self.profile.description,
            language=self.profile.language,
            framework=self.profile.framework,
            project_context=project_context,
        )

    def development_guide_prompt(
        self,
        project_context: str,
        agents_readme: str,
        skills_readme: str,
        commands: list[str],
    ) -> str:
        return DEVELOPMENT_GUIDE_PROMPT.format(
            name=self.profile.name,
            description=self.profile.description,
            language=self.profile.language,
            framework=self.profile.framework,
            architecture=self.profile.architecture,
            project_context=project_context,
            agents_readme=agents_readme or "(none)",
            skills_readme=skills_readme or "(none)",
            commands=", ".join(commands) or "(none)",
        )
