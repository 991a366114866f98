"""End-to-end tests for the staged generation pipeline."""

import json
import pytest
from claude_init.generator.pipeline import (
    PipelineResult,
    SynthesisPipeline,
    merge_with_base,
    normalize_kinds,
    plan_paths,
)
from claude_init.llm.provider import ProviderError
from claude_init.models import Recommendation
from claude_init.templates.resolver import TemplateResolver
from conftest import MockProvider, ScriptedResponses


@pytest.fixture
def no_templates(tmp_path):
    return TemplateResolver(base_dir=tmp_path / "no_templates_here")


def _run(temp_repo, profile, responses, resolver, **kwargs):
    provider = MockProvider(responses)
    pipeline = SynthesisPipeline(provider, profile, temp_repo, resolver=resolver, **kwargs)
    return pipeline.run(), provider


def test_merge_with_base():
    """Base items come first and are never lost."""
    merged = merge_with_base(Recommendation(agents=["developer", "architect"], commands=[], skills=["go"], description="d"))

    assert merged.agents == ["architect", "writer", "debugger", "planning-agent", "orchestrator-agent", "developer"]
    assert merged.commands == ["plan-manage", "orchestrator", "pre-flight"]
    assert merged.skills == ["technical-writer", "code-reviewer", "debug-master", "go"]
    assert merged.description == "d"


def test_normalize_kinds():
    """Empty selects everything; order is canonical; unknown kinds fail."""
    assert normalize_kinds(None) == ("agents", "skills", "commands", "guides")
    assert normalize_kinds(["commands", "agents"]) == ("agents", "commands")
    with pytest.raises(ValueError):
        normalize_kinds(["widgets"])


class TestFullRun:
    """A complete run against a scripted provider."""

    def test_recommendation_failure_uses_defaults(self, temp_repo, profile, no_templates):
        """A failing recommendation still produces the full tree."""
        out = temp_repo / ".claude"
        result, provider = _run(temp_repo, profile, ScriptedResponses(), no_templates)

        assert result.failures == []
        assert (temp_repo / "CLAUDE.md").read_text().startswith("# CLAUDE.md")
        assert (out / "development_guide.md").exists()

        for agent in ["architect", "writer", "debugger", "planning-agent", "orchestrator-agent", "developer", "tester", "reviewer"]:
            assert (out / "agents" / f"{agent}.md").exists()
        for category, skill in [("base", "technical-writer"), ("base", "code-reviewer"), ("base", "debug-master"), ("language", "go")]:
            assert (out / "skills" / category / f"{skill}.md").exists()
        for command in ["plan-manage", "orchestrator", "pre-flight", "test", "lint", "build"]:
            assert (out / "commands" / f"{command}.md").exists()

        agents_readme = (out / "agents" / "README.md").read_text()
        for path in result.agents:
            assert f"### {path.stem}" in agents_readme
        skills_readme = (out / "skills" / "README.md").read_text()
        assert "#### go" in skills_readme
        assert "### Base/" in skills_readme
        commands_readme = (out / "commands" / "README.md").read_text()
        assert "**Usage**: `test [args]`" in commands_readme

        assert result.recommendation.description == "Default structure for svc (Go)"

    def test_embedded_templates_avoid_provider_calls(self, temp_repo, profile, no_templates):
        """Known agents and skills are rendered locally; commands and guides are generated."""
        _, provider = _run(temp_repo, profile, ScriptedResponses(), no_templates)

        prompts = [user for _, user in provider.calls]
        assert not any("agent configuration file" in prompt for prompt in prompts)
        assert not any("skill configuration file" in prompt for prompt in prompts)
        # CLAUDE.md, recommendation, six commands, development guide
        assert len(prompts) == 9

    def test_stage_order(self, temp_repo, profile, no_templates):
        """Calls follow the stage order and commands see both READMEs."""
        responses = ScriptedResponses(output_dir=temp_repo / ".claude")
        _, provider = _run(temp_repo, profile, responses, no_templates)

        prompts = [user for _, user in provider.calls]
        assert "CLAUDE.md file for the following project" in prompts[0]
        assert "recommend the optimal" in prompts[1]
        assert "detailed development guide" in prompts[-1]

        assert responses.readmes_seen_by_command
        assert all(responses.readmes_seen_by_command.values())

        for system_prompt, _ in provider.calls[1:]:
            assert "Project context for tests." in system_prompt

    def test_file_modification_order(self, temp_repo, profile, no_templates):
        """CLAUDE.md precedes the agents, which precede their README."""
        out = temp_repo / ".claude"
        result, _ = _run(temp_repo, profile, ScriptedResponses(), no_templates)

        claude_md_mtime = (temp_repo / "CLAUDE.md").stat().st_mtime_ns
        readme_mtime = (out / "agents" / "README.md").stat().st_mtime_ns
        for path in result.agents:
            agent_mtime = path.stat().st_mtime_ns
            assert claude_md_mtime <= agent_mtime <= readme_mtime

    def test_command_prompts_carry_readmes(self, temp_repo, profile, no_templates):
        """The command prompt lists the generated agents and skills."""
        _, provider = _run(temp_repo, profile, ScriptedResponses(), no_templates)

        command_prompt = next(user for _, user in provider.calls if "for a test command" in user)
        assert "### AVAILABLE AGENTS\n# Available Agents" in command_prompt
        assert "### orchestrator-agent" in command_prompt
        assert "#### debug-master" in command_prompt

    def test_microservices_express(self, temp_repo, profile, no_templates):
        """Distributed Node projects get a debugger plus language and framework skills."""
        node = profile.model_copy(update={"language": "Nodejs", "framework": "Express", "architecture": "Microservicios"})
        out = temp_repo / ".claude"

        result, _ = _run(temp_repo, node, ScriptedResponses(), no_templates)

        assert "debugger" in result.recommendation.agents
        assert (out / "agents" / "debugger.md").exists()
        assert (out / "skills" / "language" / "nodejs.md").exists()
        assert (out / "skills" / "framework" / "express.md").exists()

    def test_provider_recommendation_is_used(self, temp_repo, profile, no_templates):
        """Recommended items are generated alongside the base items."""
        recommendation = json.dumps({"agents": ["SecurityAuditor"], "commands": ["deploy"], "skills": ["grpc"], "description": "Secure"})
        out = temp_repo / ".claude"

        result, provider = _run(temp_repo, profile, ScriptedResponses(recommendation=recommendation), no_templates)

        assert (out / "agents" / "security-auditor.md").exists()
        assert (out / "skills" / "language" / "grpc.md").exists()
        assert (out / "commands" / "deploy.md").exists()
        assert not (out / "agents" / "developer.md").exists()
        assert result.recommendation.description == "Secure"
        assert any("for a security-auditor agent" in user for _, user in provider.calls)

    def test_failed_command_is_skipped(self, temp_repo, profile, no_templates):
        """One failing command does not stop the run."""
        out = temp_repo / ".claude"
        result, _ = _run(temp_repo, profile, ScriptedResponses(fail_commands=("lint",)), no_templates)

        assert not (out / "commands" / "lint.md").exists()
        assert (out / "commands" / "test.md").exists()
        assert (out / "commands" / "build.md").exists()
        assert (out / "development_guide.md").exists()

        readme = (out / "commands" / "README.md").read_text()
        assert "### test" in readme
        assert "### lint" not in readme

        assert len(result.failures) == 1
        assert result.failures[0].startswith("command lint")

    def test_claude_md_failure_continues(self, temp_repo, profile, no_templates):
        """Without CLAUDE.md the base system prompt is used."""
        scripted = ScriptedResponses()

        def handler(system, user):
            if "CLAUDE.md file for the following project" in user:
                raise ProviderError("unavailable")
            return scripted(system, user)

        result, provider = _run(temp_repo, profile, handler, no_templates)

        assert not (temp_repo / "CLAUDE.md").exists()
        assert (temp_repo / ".claude" / "commands" / "test.md").exists()
        assert "PROJECT CONTEXT" not in provider.calls[-1][0]
        assert any(failure.startswith("CLAUDE.md") for failure in result.failures)

    def test_external_templates(self, temp_repo, profile, tmp_path):
        """External templates are adapted; other agents fall back to embedded ones."""
        examples = tmp_path / "claude_examples"
        (examples / "agents").mkdir(parents=True)
        (examples / "agents" / "architect.md").write_text("---\nname: architect\n---\n# Architect for Griddo API\n")

        result, _ = _run(temp_repo, profile, ScriptedResponses(), TemplateResolver(extra_paths=[examples]))

        out = temp_repo / ".claude"
        assert (out / "agents" / "architect.md").read_text() == "---\nname: architect\n---\n# Architect for svc\n"
        assert "# Agent Developer - svc" in (out / "agents" / "developer.md").read_text()

    def test_undecodable_template_does_not_stop_the_run(self, temp_repo, profile, tmp_path):
        """A template with invalid UTF-8 is still adapted and every later stage runs."""
        examples = tmp_path / "claude_examples"
        (examples / "agents").mkdir(parents=True)
        (examples / "agents" / "writer.md").write_bytes(b"---\nname: writer\n---\n# caf\xe9 Griddo\n")

        result, _ = _run(temp_repo, profile, ScriptedResponses(), TemplateResolver(extra_paths=[examples]))

        out = temp_repo / ".claude"
        assert "# caf� svc" in (out / "agents" / "writer.md").read_text(encoding="utf-8")
        assert (out / "agents" / "README.md").exists()
        assert (out / "skills" / "README.md").exists()
        assert (out / "commands" / "README.md").exists()
        assert (out / "development_guide.md").exists()
        assert not any(failure.startswith("agent writer") for failure in result.failures)

    def test_claude_md_regenerated(self, temp_repo, profile, no_templates):
        """An existing CLAUDE.md is replaced."""
        (temp_repo / "CLAUDE.md").write_text("stale")

        _run(temp_repo, profile, ScriptedResponses(), no_templates)

        assert (temp_repo / "CLAUDE.md").read_text().startswith("# CLAUDE.md")


class TestKindSelection:
    """Runs limited to some artifact kinds."""

    def test_agents_only(self, temp_repo, profile, no_templates):
        """Only agents and their README are written."""
        out = temp_repo / ".claude"
        result, provider = _run(temp_repo, profile, ScriptedResponses(), no_templates, kinds=["agents"])

        assert (out / "agents" / "README.md").exists()
        assert not (out / "skills").exists()
        assert not (out / "commands").exists()
        assert not (temp_repo / "CLAUDE.md").exists()
        assert not (out / "development_guide.md").exists()
        assert result.commands == []
        assert len(provider.calls) == 1

    def test_readme_lists_only_this_run(self, temp_repo, profile, no_templates):
        """Files from earlier runs are not indexed."""
        stale = temp_repo / ".claude" / "commands" / "legacy.md"
        stale.parent.mkdir(parents=True)
        stale.write_text("---\ndescription: Old\n---\n")

        _run(temp_repo, profile, ScriptedResponses(), no_templates, kinds=["commands"])

        readme = (temp_repo / ".claude" / "commands" / "README.md").read_text()
        assert "### legacy" not in readme
        assert "### test" in readme

    def test_custom_output_dir(self, temp_repo, profile, no_templates, tmp_path):
        """The tree can be written outside the project."""
        out = tmp_path / "custom"
        result, _ = _run(temp_repo, profile, ScriptedResponses(), no_templates, output_dir=out)

        assert (out / "agents" / "architect.md").exists()
        assert (temp_repo / "CLAUDE.md").exists()
        assert all(str(path).startswith(str(out)) or path.name == "CLAUDE.md" for path in result.written)


def test_plan_paths(temp_repo, profile):
    """Planned paths follow the stage order without provider calls."""
    paths = plan_paths(profile, temp_repo, Recommendation(agents=["developer"], skills=["go"], commands=["test"]))
    out = temp_repo / ".claude"

    assert paths[0] == temp_repo / "CLAUDE.md"
    assert paths[-1] == out / "development_guide.md"
    assert out / "agents" / "developer.md" in paths
    assert out / "skills" / "language" / "go.md" in paths
    assert out / "skills" / "base" / "code-reviewer.md" in paths
    assert out / "commands" / "README.md" in paths
    assert paths.index(out / "agents" / "README.md") < paths.index(out / "skills" / "base" / "technical-writer.md")


def test_plan_paths_kind_filter(temp_repo, profile):
    paths = plan_paths(profile, temp_repo, Recommendation(), kinds=["skills"])

    assert temp_repo / "CLAUDE.md" not in paths
    assert all("skills" in path.parts for path in paths)


def test_pipeline_result_written():
    """Written files are reported guides first."""
    result = PipelineResult()
    result.fail("agent x", ProviderError("boom"))

    assert result.written == []
    assert result.failures == ["agent x: boom"]
