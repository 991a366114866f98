"""Built-in agent, skill and command templates used when no external template exists."""

import logging
from typing import Optional
from ..generator.naming import sanitize
from ..models import BASE_ITEMS, ProjectProfile


logger = logging.getLogger(__name__)

DEFAULT_AGENT_COLOR = "gray"
BASE_AGENT_TOOLS = "Read, Write, Edit, Bash, Glob, Grep"

AGENT_COLORS = {
    "architect": "cyan",
    "developer": "pink",
    "tester": "green",
    "reviewer": "yellow",
    "debugger": "red",
    "writer": "blue",
    "planner": "purple",
    "orchestrator": "orange",
}

AGENT_EXTRA_TOOLS = {
    "architect": ", Test, WebSearch",
    "developer": ", Test",
    "tester": ", Test, RunTests",
    "debugger": ", RunTests, Browser",
}

# Base agents are named after their role with an "-agent" suffix
ROLE_ALIASES = {"planning": "planner"}

ROLE_DESCRIPTIONS = {
    "architect": (
        "The Architect Agent for {name} is responsible for designing the system "
        "architecture, defining module boundaries and keeping the {architecture} "
        "structure consistent."
    ),
    "developer": (
        "The Developer Agent for {name} implements features and fixes in {language}, "
        "following the project conventions and the architecture decisions."
    ),
    "tester": (
        "The Tester Agent for {name} designs and runs tests, guards coverage and "
        "reports regressions before changes are merged."
    ),
    "reviewer": (
        "The Reviewer Agent for {name} reviews changes for correctness, readability "
        "and adherence to the project standards."
    ),
    "debugger": (
        "The Debugger Agent for {name} reproduces failures, isolates root causes and "
        "proposes minimal, verified fixes."
    ),
    "writer": (
        "The Writer Agent for {name} keeps documentation, guides and code comments "
        "accurate and up to date."
    ),
    "planner": (
        "The Planner Agent for {name} turns requests into phased implementation plans "
        "with clear acceptance criteria."
    ),
    "orchestrator": (
        "The Orchestrator Agent for {name} coordinates the other agents, sequencing "
        "their work and checking each handoff."
    ),
}

DEFAULT_ROLE_DESCRIPTION = "The {title} Agent for {name} assists with development tasks."

ROLE_RESPONSIBILITIES = {
    "architect": [
        "Design the overall system structure and module boundaries",
        "Document architecture decisions and their trade-offs",
        "Review changes that affect cross-cutting concerns",
    ],
    "developer": [
        "Implement features according to the agreed design",
        "Write clean, tested and maintainable code",
        "Keep changes small and focused",
    ],
    "tester": [
        "Write unit and integration tests",
        "Maintain test fixtures and test data",
        "Report failures with clear reproduction steps",
    ],
    "reviewer": [
        "Review code for correctness and style",
        "Flag security and performance issues",
        "Suggest concrete improvements",
    ],
    "debugger": [
        "Reproduce reported issues",
        "Identify the root cause of failures",
        "Verify fixes with regression tests",
    ],
    "writer": [
        "Maintain READMEs, guides and API documentation",
        "Keep code comments accurate",
        "Document decisions and workflows",
    ],
    "planner": [
        "Break requests into phases and tasks",
        "Identify dependencies and risks",
        "Define acceptance criteria for each phase",
    ],
    "orchestrator": [
        "Assign tasks to the right agents",
        "Track progress across phases",
        "Validate each handoff before continuing",
    ],
}

DEFAULT_RESPONSIBILITIES = ["Assist with development tasks", "Follow the project conventions"]

BASE_GUIDELINES = [
    "Follow the existing code style",
    "Prefer small, reviewable changes",
    "Keep tests passing",
]

LANGUAGE_GUIDELINES = {
    "typescript": "Use strict typing and avoid `any`",
    "go": "Follow Effective Go and handle every error explicitly",
    "python": "Follow PEP 8 and type public functions",
    "rust": "Write idiomatic Rust and let the borrow checker guide ownership",
}

SKILL_DETAILS = {
    "technical-writer": {
        "title": "Technical Writing Skill",
        "description": "Assist with technical writing, documentation, and code comments",
        "triggers": [
            "write documentation for",
            "document this module",
            "improve the README",
        ],
        "example": (
            "```markdown\n"
            "## Installation\n\n"
            "1. Clone the repository\n"
            "2. Install the dependencies\n"
            "3. Run the test suite\n"
            "```"
        ),
    },
    "code-reviewer": {
        "title": "Code Review Skill",
        "description": "Review code for quality, best practices, and potential issues",
        "triggers": [
            "review this code",
            "check this pull request",
            "is this implementation correct",
        ],
        "example": (
            "```markdown\n"
            "**Issue**: unchecked error on line 42\n"
            "**Severity**: high\n"
            "**Suggestion**: return the error to the caller\n"
            "```"
        ),
    },
    "debug-master": {
        "title": "Debugging Skill",
        "description": "Debug complex issues, analyze errors, and propose solutions",
        "triggers": [
            "debug this error",
            "why does this fail",
            "find the root cause",
        ],
        "example": (
            "```markdown\n"
            "**Symptom**: request times out\n"
            "**Root cause**: connection pool exhausted\n"
            "**Fix**: release connections in a finally block\n"
            "```"
        ),
    },
}

COMMAND_DESCRIPTIONS = {
    "test": "Runs the tests for {name} and reports the results",
    "lint": "Runs the linters for {name} and fixes style issues",
    "build": "Builds {name} and reports build problems",
    "new-feature": "Plans and implements a new feature in {name}",
    "refactor": "Refactors code in {name} without changing behavior",
    "bug-fix": "Diagnoses and fixes a bug in {name}",
    "plan-manage": "Creates and maintains implementation plans for {name}",
    "orchestrator": "Coordinates several agents to complete a task in {name}",
    "pre-flight": "Checks that {name} is ready before starting or shipping work",
}

DEFAULT_COMMAND_DESCRIPTION = "Command for {command} in {name}"

COMMAND_USAGES = {
    "test": "test [test-name]",
    "lint": "lint [file-or-directory]",
    "build": "build [environment]",
    "new-feature": "new-feature [feature-name] [description]",
    "refactor": "refactor [file-or-component]",
    "bug-fix": "bug-fix [error-description]",
    "plan-manage": "plan-manage [create|update|status] [plan-name]",
    "orchestrator": "orchestrator [task-description]",
    "pre-flight": "pre-flight [scope]",
}

COMMAND_FLOWS = {
    "test": [
        ("Run tests", "tester", "{language_skill}", "Execute the suite and collect failures."),
        ("Report", "tester", "technical-writer", "Summarize results and coverage gaps."),
    ],
    "lint": [
        ("Analyze", "reviewer", "code-reviewer", "Run the linters and group the findings."),
        ("Fix", "reviewer", "{language_skill}", "Apply safe fixes and list the rest."),
    ],
    "build": [
        ("Build", "developer", "{language_skill}", "Run the build for the requested environment."),
        ("Verify", "developer", "debug-master", "Investigate and explain any build failure."),
    ],
    "new-feature": [
        ("Plan", "planning-agent", "technical-writer", "Define scope, phases and acceptance criteria."),
        ("Implement", "developer", "{language_skill}", "Build the feature phase by phase."),
        ("Validate", "tester", "code-reviewer", "Test the feature and review the changes."),
        ("Document", "writer", "technical-writer", "Update the documentation."),
    ],
    "refactor": [
        ("Assess", "reviewer", "code-reviewer", "Identify the code smells and the target design."),
        ("Refactor", "developer", "{language_skill}", "Apply the changes in small steps."),
        ("Verify", "tester", "{language_skill}", "Confirm behavior is unchanged."),
    ],
    "bug-fix": [
        ("Diagnose", "debugger", "debug-master", "Reproduce the bug and find the root cause."),
        ("Fix", "developer", "{language_skill}", "Implement the fix with a regression test."),
    ],
    "plan-manage": [
        ("Draft", "planning-agent", "technical-writer", "Create or update the plan document."),
        ("Review", "architect", "code-reviewer", "Check the plan against the architecture."),
    ],
    "orchestrator": [
        ("Plan", "planning-agent", "technical-writer", "Split the task into phases."),
        ("Coordinate", "orchestrator-agent", "code-reviewer", "Dispatch each phase to its agent."),
        ("Validate", "orchestrator-agent", "debug-master", "Check every handoff before continuing."),
    ],
    "pre-flight": [
        ("Inspect", "architect", "code-reviewer", "Check the working tree and the dependencies."),
        ("Verify", "debugger", "debug-master", "Run the checks and report blockers."),
    ],
}

DEFAULT_COMMAND_FLOW = [
    ("Execute", "developer", "{language_skill}", "Carry out the {command} task."),
]

AGENT_TEMPLATE = """---
name: {agent_name}
description: {description}
tools: {tools}
model: sonnet
color: {color}
skills: [{skills_inline}]
---

# Agent {title} - {project_name}

## Role
{description}

## Your Specialty
Your technical expertise comes from the **skills** injected into each task:
{skills_list}

## Work Process
1. **Analysis**: Understand the context and the requirements of the task.
2. **Planning**: Break the task into actionable steps.
3. **Implementation**: Execute following {language} best practices.
4. **Validation**: Make sure the result meets the quality standards.
5. **Documentation**: Record the decisions and patterns applied.

## Code Conventions
- **Typing**: Follow the {language} typing conventions.
- **Naming**: Use the standard naming conventions of the language.
- **Structure**: Keep a clear, modular organization.
- **Style**: Follow the project style guides.

## Golden Rules
- **Quality**: Prefer clean, maintainable code.
- **Testing**: Keep test coverage adequate.
- **Documentation**: Document complex code and architecture decisions.
- **Collaboration**: Coordinate with other agents when needed.
"""

SKILL_TEMPLATE = """---
name: {skill_name}
description: {description}
category: {category}
---

# {title}

{description}

## How It Works

1. The agent identifies the need to use the {skill_name} skill.
2. The specific context and requirements are analyzed.
3. The {skill_name} patterns and best practices are applied.

## Usage

This skill is activated when working with {skill_name} in the {project_name} project.

**Trigger phrases:**
{triggers}

## Capabilities

- Best practices for {skill_name}
- Patterns and conventions used in {project_name}
- Optimization techniques
- Testing strategies
- Common pitfalls and their solutions

## Output Examples

{example}

## Present Results to User

When applying this skill, present the results in a clear, structured format:
- A short summary of what was done
- The key changes or recommendations
- Relevant code snippets
- Next steps or open considerations

## Troubleshooting

**Common issues:**
- **Incorrect syntax**: Follow {language} conventions and best practices
- **Missing dependencies**: Make sure every required package is installed
- **Type errors**: Check the type annotations and interfaces
- **Performance issues**: Review the hot paths for optimization opportunities
"""

COMMAND_TEMPLATE = """---
name: {command_name}
description: {description}
usage: {usage}
---

# Command: {title}

{description}

## Orchestrated Implementation Flow

{flow}

## Critical Rules
- **Quality**: Keep code quality standards high.
- **Testing**: Keep test coverage adequate.
- **Documentation**: Document changes and decisions.
- **Collaboration**: Coordinate with other agents when needed.

---

What {command_name} task would you like to run in {project_name}?
"""


def capitalize(value: str) -> str:
    return value[:1].upper() + value[1:]


def agent_role(agent_name: str) -> str:
    """Map an agent name to its role key, e.g. ``planning-agent`` to ``planner``."""
    role = agent_name.lower()
    if role.endswith("-agent"):
        role = role[: -len("-agent")]
    return ROLE_ALIASES.get(role, role)


class EmbeddedTemplateBank:
    """Renders built-in templates parameterized by a project profile."""

    def __init__(self, profile: ProjectProfile):
        self.profile = profile

    @property
    def language_skill(self) -> str:
        return sanitize(self.profile.language)

    @property
    def framework_skill(self) -> str:
        return sanitize(self.profile.framework) if self.profile.framework else ""

    # Agents

    def has_agent(self, name: str) -> bool:
        return agent_role(name) in AGENT_COLORS

    def agent_color(self, name: str) -> str:
        return AGENT_COLORS.get(agent_role(name), DEFAULT_AGENT_COLOR)

    def agent_tools(self, name: str) -> str:
        return BASE_AGENT_TOOLS + AGENT_EXTRA_TOOLS.get(agent_role(name), "")

    def agent_skills(self, name: str) -> list[str]:
        """Skills injected into a role, restricted to names this generation produces."""
        role = agent_role(name)
        language = self.language_skill
        framework = self.framework_skill

        if role == "architect":
            skills = [language, "code-reviewer"]
        elif role == "developer":
            skills = [language, framework]
        elif role == "tester":
            skills = [language, "debug-master"]
        elif role == "reviewer":
            skills = ["code-reviewer", language]
        elif role == "debugger":
            skills = ["debug-master", language]
        elif role == "writer":
            skills = ["technical-writer", "code-reviewer"]
        elif role in ("planner", "orchestrator"):
            skills = ["technical-writer"]
        else:
            skills = [language, "code-reviewer"]

        return [skill for skill in skills if skill]

    def role_description(self, name: str) -> str:
        template = ROLE_DESCRIPTIONS.get(agent_role(name), DEFAULT_ROLE_DESCRIPTION)
        return template.format(
            name=self.profile.name,
            title=capitalize(name),
            language=self.profile.language,
            architecture=self.profile.architecture,
        )

    def role_responsibilities(self, name: str) -> list[str]:
        return list(ROLE_RESPONSIBILITIES.get(agent_role(name), DEFAULT_RESPONSIBILITIES))

    def role_guidelines(self) -> list[str]:
        guidelines = list(BASE_GUIDELINES)
        extra = LANGUAGE_GUIDELINES.get(self.profile.language.strip().lower())
        if extra:
            guidelines.append(extra)
        return guidelines

    def agent(self, name: str) -> Optional[str]:
        """Render the built-in agent template, or None for unknown roles."""
        if not self.has_agent(name):
            return None

        skills = self.agent_skills(name)
        return AGENT_TEMPLATE.format(
            agent_name=name,
            description=self.role_description(name),
            tools=self.agent_tools(name),
            color=self.agent_color(name),
            skills_inline=", ".join(skills),
            title=capitalize(agent_role(name)),
            project_name=self.profile.name,
            skills_list="\n".join(f"- `{skill}`" for skill in skills),
            language=self.profile.language,
        )

    # Skills

    def has_skill(self, name: str) -> bool:
        return name in SKILL_DETAILS or name in (self.language_skill, self.framework_skill)

    def skill_description(self, name: str) -> str:
        if name in SKILL_DETAILS:
            return SKILL_DETAILS[name]["description"]
        if name == self.language_skill:
            return f"Optimize {self.profile.language} performance and configure {self.profile.language} projects"
        if name == self.framework_skill:
            return f"Configure and optimize {self.profile.framework} framework components"
        return f"Assist with {name}-related tasks and configurations"

    def skill_title(self, name: str) -> str:
        if name in SKILL_DETAILS:
            return SKILL_DETAILS[name]["title"]
        return f"{capitalize(name)} Skill"

    def skill_triggers(self, name: str) -> list[str]:
        if name in SKILL_DETAILS:
            return list(SKILL_DETAILS[name]["triggers"])
        return [
            f"optimize this {name} code",
            f"configure {name} for this project",
            f"apply {name} best practices",
        ]

    def skill_example(self, name: str) -> str:
        if name in SKILL_DETAILS:
            return SKILL_DETAILS[name]["example"]
        return (
            "```markdown\n"
            f"**Change**: applied {name} conventions to the module\n"
            "**Impact**: clearer structure and fewer edge-case bugs\n"
            "```"
        )

    def skill(self, name: str, category: str) -> Optional[str]:
        """Render the built-in skill template, or None when the name is not covered."""
        if not self.has_skill(name):
            return None

        return SKILL_TEMPLATE.format(
            skill_name=name,
            description=self.skill_description(name),
            category=category,
            title=self.skill_title(name),
            project_name=self.profile.name,
            triggers="\n".join(f'- "{trigger}"' for trigger in self.skill_triggers(name)),
            example=self.skill_example(name),
            language=self.profile.language,
        )

    # Commands

    def has_command(self, name: str) -> bool:
        return name in COMMAND_FLOWS

    def command_description(self, name: str) -> str:
        template = COMMAND_DESCRIPTIONS.get(name, DEFAULT_COMMAND_DESCRIPTION)
        return template.format(name=self.profile.name, command=name)

    def command_usage(self, name: str) -> str:
        return COMMAND_USAGES.get(name, name)

    def command_flow(self, name: str) -> str:
        """Numbered phases, each naming the agent and the skill it relies on."""
        steps = COMMAND_FLOWS.get(name, DEFAULT_COMMAND_FLOW)
        lines = []
        for index, (phase, agent, skill, detail) in enumerate(steps, start=1):
            skill = skill.format(language_skill=self.language_skill)
            lines.append(f"### Phase {index}: {phase}")
            lines.append(f"- **Agent**: `{agent}`")
            lines.append(f"- **Skill**: `{skill}`")
            lines.append(f"- {detail.format(command=name)}")
            lines.append("")
        return "\n".join(lines).rstrip()

    def command(self, name: str) -> Optional[str]:
        """Render the built-in command template, or None when the name is not covered."""
        if not self.has_command(name):
            return None

        return COMMAND_TEMPLATE.format(
            command_name=name,
            description=self.command_description(name),
            usage=self.command_usage(name),
            title=capitalize(name),
            flow=self.command_flow(name),
            project_name=self.profile.name,
        )

    def render(self, kind: str, name: str, category: str = "") -> Optional[str]:
        if kind == "agent":
            return self.agent(name)
        if kind == "skill":
            return self.skill(name, category or ("base" if name in BASE_ITEMS.skills else "language"))
        if kind == "command":
            return self.command(name)
        logger.debug("No embedded templates for kind %s", kind)
        return None
