"""Tests for reading metadata back from generated files."""

from claude_init.generator.frontmatter import (
    first_body_line,
    parse_agent,
    parse_command,
    parse_frontmatter,
    parse_list_value,
    parse_skill,
    split_frontmatter,
)


def test_split_frontmatter():
    """A leading delimited block is separated from the body."""
    raw_meta, body = split_frontmatter("\n---\nname: x\n---\n# Body\n")
    assert raw_meta.strip() == "name: x"
    assert body.strip() == "# Body"


def test_split_without_frontmatter():
    """Content without an opening delimiter has no metadata."""
    raw_meta, body = split_frontmatter("# Title\n---\nname: x\n---\n")
    assert raw_meta is None
    assert body.startswith("# Title")


def test_split_unclosed_block():
    """An unterminated block is treated as body text."""
    raw_meta, _ = split_frontmatter("---\nname: x\n")
    assert raw_meta is None


def test_parse_frontmatter_splits_on_first_colon():
    """Values keep any further colons and unbalanced brackets."""
    metadata = parse_frontmatter("name: x\ndescription: Uses: colons: everywhere\ntools: [Read\n")
    assert metadata["name"] == "x"
    assert metadata["description"] == "Uses: colons: everywhere"
    assert metadata["tools"] == "[Read"


def test_parse_frontmatter_keeps_values_verbatim():
    """A hash inside a value and yes/no words are plain text."""
    metadata = parse_frontmatter(
        "description: Fixes issue #42 regressions quickly\nauto: yes\nenabled: off\nskills: [go, gin]\n"
    )
    assert metadata == {
        "description": "Fixes issue #42 regressions quickly",
        "auto": "yes",
        "enabled": "off",
        "skills": "[go, gin]",
    }


def test_parse_list_value():
    """Bracketed text, sequences and scalars all become lists."""
    assert parse_list_value("[A, B]") == ["A", "B"]
    assert parse_list_value(["A", " B "]) == ["A", "B"]
    assert parse_list_value("Read, Write") == ["Read, Write"]
    assert parse_list_value("") == []
    assert parse_list_value(None) == []
    assert parse_list_value("[]") == []
    assert parse_list_value('["go", \'gin\']') == ["go", "gin"]


def test_first_body_line():
    """Heading marks are stripped and long lines are clipped."""
    assert first_body_line("\n\n# Agent Developer\nText") == "Agent Developer"
    assert first_body_line("# Title\n\nFirst paragraph", skip_headings=True) == "First paragraph"
    assert first_body_line("x" * 250) == "x" * 200 + "..."
    assert first_body_line("") == ""


class TestParseAgent:
    """Agent metadata extraction."""

    def test_full_frontmatter(self, tmp_path):
        """Every declared field is read; the name comes from the file name."""
        path = tmp_path / "developer.md"
        path.write_text(
            "---\nname: something-else\ndescription: Builds features\ntools: [A, B]\n"
            "model: opus\ncolor: pink\nskills: [go, code-reviewer]\n---\n\n# Developer\n"
        )

        agent = parse_agent(path)

        assert agent.name == "developer"
        assert agent.description == "Builds features"
        assert agent.tools == ["A", "B"]
        assert agent.model == "opus"
        assert agent.color == "pink"
        assert agent.skills == ["go", "code-reviewer"]
        assert agent.path == path

    def test_without_frontmatter(self, tmp_path):
        """Defaults apply and the first body line becomes the description."""
        path = tmp_path / "tester.md"
        path.write_text("# Tester agent\n\nRuns tests.\n")

        agent = parse_agent(path)

        assert agent.name == "tester"
        assert agent.description == "Tester agent"
        assert agent.color == "gray"
        assert agent.model == "sonnet"
        assert agent.tools == []

    def test_empty_file(self, tmp_path):
        """An empty file still yields a record."""
        path = tmp_path / "ghost.md"
        path.write_text("")

        assert parse_agent(path).description == "Agent ghost"

    def test_description_with_hash(self, tmp_path):
        """The whole description survives a ``#`` in the middle."""
        path = tmp_path / "fixer.md"
        path.write_text("---\nname: fixer\ndescription: Fixes issue #42 regressions quickly\n---\nBody\n")

        assert parse_agent(path).description == "Fixes issue #42 regressions quickly"

    def test_malformed_yaml(self, tmp_path):
        """Blocks that are not valid YAML still parse line by line."""
        path = tmp_path / "writer.md"
        path.write_text("---\ndescription: Writes docs: all of them\ncolor: blue\ntools: [Read\n---\nBody\n")

        agent = parse_agent(path)

        assert agent.description == "Writes docs: all of them"
        assert agent.color == "blue"
        assert agent.tools == ["Read"]


class TestParseSkill:
    """Skill metadata extraction."""

    def test_category_from_directory(self, tmp_path):
        """The parent directory decides the category."""
        path = tmp_path / "framework" / "gin.md"
        path.parent.mkdir()
        path.write_text("---\nname: gin\ndescription: Gin routing\ncategory: language\n---\n")

        skill = parse_skill(path)

        assert skill.name == "gin"
        assert skill.category == "framework"
        assert skill.description == "Gin routing"
        assert skill.purpose == "Provides gin-related expertise and capabilities"

    def test_declared_category_and_purpose(self, tmp_path):
        """Outside a category directory the declared value is used."""
        path = tmp_path / "misc.md"
        path.write_text("---\ndescription: Misc\ncategory: base\npurpose: Helps\n---\n")

        skill = parse_skill(path)

        assert skill.category == "base"
        assert skill.purpose == "Helps"

    def test_unknown_category(self, tmp_path):
        """Anything else is 'other'."""
        path = tmp_path / "misc.md"
        path.write_text("# Misc Skill\n\nUseful knowledge.\n")

        skill = parse_skill(path)

        assert skill.category == "other"
        assert skill.description == "Useful knowledge."


def test_parse_command(tmp_path):
    """Usage defaults to the command name."""
    path = tmp_path / "deploy.md"
    path.write_text("---\ndescription: Ships it\n---\n# Command: Deploy\n")

    command = parse_command(path)

    assert command.name == "deploy"
    assert command.description == "Ships it"
    assert command.usage == "deploy"
