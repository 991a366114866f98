"""Toolchain facts gathered from a project to enrich the CLAUDE.md prompt."""

import json
import tomllib
from pathlib import Path
from typing import Iterable


IMPORTANT_SCRIPTS = ["dev", "start", "build", "test", "lint", "type-check", "watch"]

IMPORTANT_DEPENDENCIES = [
    "react", "vue", "angular", "svelte", "next", "nuxt", "gatsby",
    "express", "fastify", "koa", "nest",
    "axios", "lodash", "ramda",
    "zod", "typeorm", "prisma", "mongoose", "sequelize",
    "joi", "yup",
]

IMPORTANT_DEV_DEPENDENCIES = [
    "typescript", "vite", "webpack", "rollup", "esbuild", "parcel",
    "jest", "vitest", "mocha", "jasmine", "cypress", "playwright", "@testing-library",
    "eslint", "prettier", "@typescript-eslint",
    "babel", "postcss", "tailwindcss", "sass", "less",
    "storybook", "@storybook",
]

COMMON_DIRS = [
    "src", "app", "components", "lib", "utils", "hooks", "types",
    "tests", "__tests__", "test", "spec", "styles", "assets", "public",
    "dist", "build", "config", "scripts",
]

COMMON_DOC_DIRS = ["docs", "documentation", "guide", "guides", "wiki", "help"]

NO_CONTEXT_MESSAGE = "No additional project information could be extracted."


def _matches_any(name: str, needles: Iterable[str]) -> bool:
    return any(needle in name for needle in needles)


class ProjectContextAnalyzer:
    """Inspects manifests, layout and docs of a project on disk."""

    def __init__(self, project_path: Path, documentation_dirs: Iterable[str] = ()):
        self.project_path = project_path
        self.documentation_dirs = list(documentation_dirs)

    def analyze(self) -> str:
        """Collect every section that has something to say.

        Returns:
            Markdown fragments joined by blank lines, or a fixed message when
            nothing could be extracted
        """
        sections = [
            ("Package.json info", self.analyze_package_json()),
            ("Python project", self.analyze_pyproject()),
            ("TypeScript config", self.analyze_tsconfig()),
            ("Directory structure", self.analyze_directory_structure()),
            ("Code quality tools", self.analyze_code_quality()),
            ("Documentation", self.analyze_documentation()),
        ]

        parts = [f"**{title}:**\n{body}" for title, body in sections if body]
        if not parts:
            return NO_CONTEXT_MESSAGE
        return "\n\n".join(parts) + "\n"

    def _read_json(self, name: str) -> dict:
        path = self.project_path / name
        if not path.is_file():
            return {}
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError):
            return {}
        return data if isinstance(data, dict) else {}

    def detect_package_manager(self) -> str:
        """yarn beats pnpm beats npm, decided by lock-file presence."""
        if (self.project_path / "yarn.lock").exists():
            return "yarn"
        if (self.project_path / "pnpm-lock.yaml").exists():
            return "pnpm"
        return "npm"

    def analyze_package_json(self) -> str:
        package = self._read_json("package.json")
        if not package:
            return ""

        lines = ["- **Scripts:**"]
        scripts = package.get("scripts") or {}
        for key in IMPORTANT_SCRIPTS:
            if key in scripts:
                lines.append(f"  - `{key}`: {scripts[key]}")

        manager = self.detect_package_manager()
        if manager == "yarn":
            lines.append("\n- **Package Manager**: yarn (always use yarn, not npm)")
        else:
            lines.append(f"\n- **Package Manager**: {manager}")

        dependencies = package.get("dependencies") or {}
        if dependencies:
            lines.append("\n- **Main dependencies:**")
            for name in sorted(dependencies):
                if _matches_any(name, IMPORTANT_DEPENDENCIES):
                    lines.append(f"  - {name}: {dependencies[name]}")

        dev_dependencies = package.get("devDependencies") or {}
        if dev_dependencies:
            lines.append("\n- **Dev dependencies:**")
            for name in sorted(dev_dependencies):
                if _matches_any(name, IMPORTANT_DEV_DEPENDENCIES):
                    lines.append(f"  - {name}: {dev_dependencies[name]}")

        return "\n".join(lines) + "\n"

    def analyze_pyproject(self) -> str:
        """Summarize ``pyproject.toml``: name, Python requirement, dependencies, scripts."""
        pyproject = self.project_path / "pyproject.toml"
        if not pyproject.is_file():
            return ""

        try:
            data = tomllib.loads(pyproject.read_text(encoding="utf-8"))
        except (OSError, tomllib.TOMLDecodeError):
            return ""

        project = data.get("project", {})
        lines = []
        if project.get("name"):
            lines.append(f"- **Name**: {project['name']}")
        if project.get("requires-python"):
            lines.append(f"- **Python**: {project['requires-python']}")

        dependencies = project.get("dependencies", [])
        if dependencies:
            lines.append("- **Dependencies:**")
            lines.extend(f"  - {dep}" for dep in dependencies)

        scripts = project.get("scripts", {})
        if scripts:
            lines.append("- **Console scripts:**")
            lines.extend(f"  - `{name}`: {target}" for name, target in scripts.items())

        return "\n".join(lines) + "\n" if lines else ""

    def analyze_tsconfig(self) -> str:
        tsconfig = self._read_json("tsconfig.json")
        options = tsconfig.get("compilerOptions")
        if not isinstance(options, dict):
            return ""

        lines = ["- **TypeScript Configuration:**"]
        if isinstance(options.get("target"), str):
            lines.append(f"  - target: {options['target']}")
        if options.get("strict") is True:
            lines.append("  - strict mode: enabled")

        paths = options.get("paths")
        if isinstance(paths, dict) and paths:
            lines.append("\n- **Import Path Aliases:**")
            for alias, targets in paths.items():
                lines.append(f"  - {alias}: {targets}")

        return "\n".join(lines) + "\n"

    def analyze_directory_structure(self) -> str:
        """List well-known top-level directories and their visible subdirectories."""
        lines = []
        for name in COMMON_DIRS:
            directory = self.project_path / name
            if not directory.is_dir():
                continue
            lines.append(f"{name}/")
            try:
                children = sorted(directory.iterdir(), key=lambda p: p.name)
            except OSError:
                continue
            for child in children:
                if child.is_dir() and not child.name.startswith("."):
                    lines.append(f"  └── {child.name}/")

        if not lines:
            return ""
        return "```\n" + "\n".join(lines) + "\n```"

    def analyze_code_quality(self) -> str:
        root = self.project_path
        lines = []

        if (root / "eslint.config.mjs").exists():
            lines.append("- ESLint: Modern flat config (eslint.config.mjs)")
        elif (root / ".eslintrc.json").exists():
            lines.append("- ESLint: .eslintrc.json")
        elif (root / ".eslintrc.js").exists():
            lines.append("- ESLint: .eslintrc.js")

        if (root / ".prettierrc").exists():
            lines.append("- Prettier: configured")
        elif (root / ".prettierrc.json").exists():
            lines.append("- Prettier: configured (.prettierrc.json)")

        if (root / ".husky").exists():
            lines.append("- Husky: git hooks configured")

        return "\n".join(lines) + "\n" if lines else ""

    def analyze_documentation(self) -> str:
        """Summarize documentation directories and the root README."""
        blocks = []
        seen = set()

        for doc_dir in COMMON_DOC_DIRS + self.documentation_dirs:
            if not doc_dir or doc_dir in seen:
                continue
            seen.add(doc_dir)

            doc_path = self.project_path / doc_dir
            if not doc_path.is_dir():
                continue

            lines = [f"- Directory '{doc_dir}/' found:"]
            try:
                doc_files = sorted(
                    p for p in doc_path.iterdir() if p.is_file() and p.suffix in (".md", ".txt")
                )
            except OSError:
                doc_files = []

            if doc_files:
                lines.append("  Documentation files:")
                for doc_file in doc_files:
                    summary = self.doc_file_summary(doc_file)
                    lines.append(f"  - {doc_file.name}: {summary}" if summary else f"  - {doc_file.name}")

            blocks.append("\n".join(lines))

        if (self.project_path / "README.md").exists():
            blocks.append("- README.md found at the project root")

        return "\n\n".join(blocks) + "\n" if blocks else ""

    @staticmethod
    def doc_file_summary(path: Path) -> str:
        """First heading, or the first substantive line, of a document."""
        try:
            content = path.read_text(encoding="utf-8", errors="ignore")
        except OSError:
            return ""

        for raw_line in content.splitlines():
            line = raw_line.strip()
            if line.startswith("#"):
                title = line.lstrip("#").strip()
                if title and len(title) < 100:
                    return title
                continue
            if not line.startswith("---") and 10 < len(line) < 100:
                return line

        return ""
