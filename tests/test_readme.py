"""Tests for the directory README indexes."""

from claude_init.generator.readme import render_agents_readme, render_commands_readme, render_skills_readme
from claude_init.models import AgentInfo, CommandInfo, SkillInfo


def test_agents_readme():
    """Each agent gets a section with its metadata."""
    agents = [
        AgentInfo(name="architect", description="Designs things", color="cyan", tools=["Read", "Write"], skills=["go"]),
        AgentInfo(name="writer", description="Writes docs", color="blue"),
    ]

    content = render_agents_readme("svc", agents)

    assert content.startswith("# Available Agents")
    assert "svc project" in content
    assert "### architect" in content
    assert "**Description**: Designs things" in content
    assert "**Color**: cyan" in content
    assert "**Model**: sonnet" in content
    assert "**Tools**: Read, Write" in content
    assert "**Injected Skills**:\n- go" in content
    assert content.index("### architect") < content.index("### writer")


def test_skills_readme_groups_by_category():
    """Skills are grouped language, framework, base, other."""
    skills = [
        SkillInfo(name="code-reviewer", category="base", description="Reviews"),
        SkillInfo(name="gin", category="framework", description="Gin"),
        SkillInfo(name="go", category="language", description="Go"),
        SkillInfo(name="misc", category="other"),
    ]

    content = render_skills_readme("svc", skills)

    positions = [content.index(heading) for heading in ("### Language/", "### Framework/", "### Base/", "### Other/")]
    assert positions == sorted(positions)
    assert "#### go" in content
    assert "**Description**: Reviews" in content


def test_skills_readme_skips_empty_categories():
    """Categories without members have no heading."""
    content = render_skills_readme("svc", [SkillInfo(name="go", category="language")])

    assert "### Language/" in content
    assert "### Framework/" not in content


def test_commands_readme():
    """Commands list their description and usage."""
    commands = [CommandInfo(name="test", description="Runs tests", usage="test [name]")]

    content = render_commands_readme("svc", commands)

    assert content.startswith("# Available Commands")
    assert "### test" in content
    assert "**Description**: Runs tests" in content
    assert "**Usage**: `test [name]`" in content


def test_empty_readmes():
    """Empty lists render a placeholder line."""
    assert "*No agents configured yet.*" in render_agents_readme("svc", [])
    assert "*No skills configured yet.*" in render_skills_readme("svc", [])
    assert "*No commands configured yet.*" in render_commands_readme("svc", [])
