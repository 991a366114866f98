"""Markdown indexes for the agents, skills and commands directories."""

from ..models import AgentInfo, CommandInfo, SkillInfo


SKILL_CATEGORY_ORDER = ("language", "framework", "base", "other")


def render_agents_readme(project_name: str, agents: list[AgentInfo]) -> str:
    lines = [
        "# Available Agents",
        "",
        f"This directory contains the specialized agents of the {project_name} project.",
        "",
    ]

    if not agents:
        lines.append("*No agents configured yet.*")
        return "\n".join(lines) + "\n"

    lines.extend(["## Configured Agents", ""])
    for agent in agents:
        lines.extend([f"### {agent.name}", ""])
        if agent.description:
            lines.extend([f"**Description**: {agent.description}", ""])
        lines.append(f"**Color**: {agent.color}")
        if agent.model:
            lines.extend(["", f"**Model**: {agent.model}"])
        if agent.tools:
            lines.extend(["", f"**Tools**: {', '.join(agent.tools)}"])
        if agent.skills:
            lines.extend(["", "**Injected Skills**:"])
            lines.extend(f"- {skill}" for skill in agent.skills)
        lines.extend(["", "---", ""])

    lines.extend([
        "## Using the Agents",
        "",
        "Agents are orchestrated by the commands in the `commands/` directory. "
        "Each command coordinates one or more agents to carry out a specific task.",
    ])
    return "\n".join(lines) + "\n"


def render_skills_readme(project_name: str, skills: list[SkillInfo]) -> str:
    """Render skills grouped by category: language, framework, base, other."""
    lines = [
        "# Available Skills",
        "",
        f"This directory contains the technical skills that agents of the {project_name} project can inject.",
        "",
    ]

    if not skills:
        lines.append("*No skills configured yet.*")
        return "\n".join(lines) + "\n"

    by_category: dict[str, list[SkillInfo]] = {}
    for skill in skills:
        by_category.setdefault(skill.category, []).append(skill)

    lines.extend(["## Skills by Category", ""])
    for category in SKILL_CATEGORY_ORDER:
        members = by_category.get(category)
        if not members:
            continue

        lines.extend([f"### {category.title()}/", ""])
        for skill in members:
            lines.extend([f"#### {skill.name}", ""])
            if skill.description:
                lines.extend([f"**Description**: {skill.description}", ""])
            if skill.purpose:
                lines.extend([f"**Purpose**: {skill.purpose}", ""])
            lines.extend(["---", ""])

    lines.extend([
        "## How Skills Work",
        "",
        "Skills are injected into agents through the YAML frontmatter:",
        "",
        "```yaml",
        "---",
        "skills: [code-reviewer, technical-writer]",
        "---",
        "```",
    ])
    return "\n".join(lines) + "\n"


def render_commands_readme(project_name: str, commands: list[CommandInfo]) -> str:
    lines = [
        "# Available Commands",
        "",
        f"This directory contains the commands of the {project_name} project.",
        "",
    ]

    if not commands:
        lines.append("*No commands configured yet.*")
        return "\n".join(lines) + "\n"

    lines.extend(["## Configured Commands", ""])
    for command in commands:
        lines.extend([f"### {command.name}", ""])
        if command.description:
            lines.extend([f"**Description**: {command.description}", ""])
        if command.usage:
            lines.extend([f"**Usage**: `{command.usage}`", ""])
        lines.extend(["---", ""])

    lines.extend([
        "## Using the Commands",
        "",
        "Commands define orchestrated workflows that use one or more agents.",
    ])
    return "\n".join(lines) + "\n"
