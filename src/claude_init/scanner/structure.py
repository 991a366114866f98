"""Repository structure scanner."""

from pathlib import Path
from typing import Optional, Set
from pathspec import PathSpec
from pathspec.patterns.gitwildmatch import GitWildMatchPattern


MAX_TREE_DEPTH = 5
MAX_FILES_PER_DIR = 10
MANIFEST_SNIPPET_CHARS = 500

IGNORED_DIRS = [
    "node_modules",
    "vendor",
    ".git",
    "dist",
    "build",
    "target",
    "bin",
    "obj",
    ".venv",
    "venv",
    "__pycache__",
    ".claude",
    ".idea",
    ".vscode",
]

MANIFEST_FILES = [
    "package.json",
    "go.mod",
    "requirements.txt",
    "pyproject.toml",
    "Cargo.toml",
    "pom.xml",
    "build.gradle",
    "composer.json",
    "Gemfile",
]


def truncate(text: str, max_len: int) -> str:
    if len(text) <= max_len:
        return text
    return text[:max_len] + "..."


class RepositoryScanner:
    """Builds the plain-text repository summary sent to the analyzer."""

    def __init__(self, ignored_dirs: Optional[list[str]] = None):
        """Initialize scanner.

        Args:
            ignored_dirs: Directory names never listed; defaults to IGNORED_DIRS
        """
        self.ignored_dirs: Set[str] = set(ignored_dirs if ignored_dirs is not None else IGNORED_DIRS)

    def scan(self, repo_path: Path) -> str:
        """Summarize a repository for the analysis prompt.

        Args:
            repo_path: Path to repository root

        Returns:
            Text with the project name, VCS marker, directory listing and
            the head of every manifest file present
        """
        lines = [f"Project directory: {repo_path.name}", ""]

        if self.has_git(repo_path):
            lines.append("Version control: git")

        lines.append("")
        lines.append("Directory structure:")
        gitignore_spec = self._load_gitignore(repo_path)
        lines.extend(self._list_directory(repo_path, repo_path, "", 0, gitignore_spec))

        lines.append("")
        lines.append("")
        lines.append("Configuration files:")
        for name, content in self.read_manifests(repo_path).items():
            lines.append("")
            lines.append(f"--- {name} ---")
            lines.append(truncate(content, MANIFEST_SNIPPET_CHARS))

        return "\n".join(lines) + "\n"

    @staticmethod
    def has_git(repo_path: Path) -> bool:
        return (repo_path / ".git").exists()

    @staticmethod
    def read_manifests(repo_path: Path) -> dict[str, str]:
        """Read every known manifest present at the repository root."""
        manifests = {}
        for name in MANIFEST_FILES:
            path = repo_path / name
            if not path.is_file():
                continue
            try:
                manifests[name] = path.read_text(encoding="utf-8", errors="ignore")
            except OSError:
                continue
        return manifests

    def _list_directory(
        self,
        current_path: Path,
        repo_root: Path,
        prefix: str,
        depth: int,
        gitignore_spec: PathSpec | None,
    ) -> list[str]:
        """Render one directory level, directories before files.

        Args:
            current_path: Directory being listed
            repo_root: Repository root for .gitignore matching
            prefix: Indentation for this level
            depth: Current depth from the root

        Returns:
            Listing lines
        """
        if depth > MAX_TREE_DEPTH:
            return []

        try:
            entries = sorted(current_path.iterdir(), key=lambda p: p.name)
        except OSError:
            return []  # Skip directories we can't access

        dirs = []
        files = []
        for entry in entries:
            if entry.name in self.ignored_dirs:
                continue
            if self._is_gitignored(entry, repo_root, gitignore_spec):
                continue
            if entry.is_dir():
                dirs.append(entry)
            else:
                files.append(entry.name)

        lines = []
        for directory in dirs:
            lines.append(f"{prefix}{directory.name}/")
            lines.extend(
                self._list_directory(directory, repo_root, prefix + "  ", depth + 1, gitignore_spec)
            )

        for index, name in enumerate(files):
            if index >= MAX_FILES_PER_DIR:
                lines.append(f"{prefix}... ({len(files) - MAX_FILES_PER_DIR} more files)")
                break
            lines.append(f"{prefix}{name}")

        return lines

    @staticmethod
    def _is_gitignored(path: Path, repo_root: Path, gitignore_spec: PathSpec | None) -> bool:
        if gitignore_spec is None:
            return False
        rel_path = path.relative_to(repo_root).as_posix()
        if path.is_dir():
            rel_path += "/"
        return gitignore_spec.match_file(rel_path)

    def _load_gitignore(self, repo_root: Path) -> PathSpec | None:
        """Load .gitignore patterns if present."""
        gitignore_path = repo_root / ".gitignore"
        if not gitignore_path.exists():
            return None

        try:
            patterns = gitignore_path.read_text().splitlines()
        except OSError:
            return None

        if not patterns:
            return None

        return PathSpec.from_lines(GitWildMatchPattern, patterns)
