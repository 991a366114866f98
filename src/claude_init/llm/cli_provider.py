"""Provider backed by the local ``claude`` command-line tool."""

import logging
import subprocess
from .provider import LLMProvider, ProviderError


logger = logging.getLogger(__name__)

DEFAULT_BINARY = "claude"
DEFAULT_TIMEOUT = 120


class ClaudeCLIProvider(LLMProvider):
    """Runs ``claude -p [--system-prompt S] MESSAGE`` and returns its stdout."""

    provider_id = "cli"

    def __init__(self, binary: str = DEFAULT_BINARY, timeout: int = DEFAULT_TIMEOUT):
        """Initialize the subprocess provider.

        Args:
            binary: Executable name or path
            timeout: Seconds to wait for the child process
        """
        self.binary = binary
        self.timeout = timeout

    def build_args(self, system_prompt: str, user_message: str) -> list[str]:
        args = [self.binary, "-p"]
        if system_prompt:
            args.extend(["--system-prompt", system_prompt])
        args.append(user_message)
        return args

    def send(self, system_prompt: str, user_message: str) -> str:
        args = self.build_args(system_prompt, user_message)
        logger.debug("Running %s -p (%d chars)", self.binary, len(user_message))

        try:
            completed = subprocess.run(
                args,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except FileNotFoundError as e:
            raise ProviderError(
                f"claude CLI error: '{self.binary}' not found. Visit https://claude.com/claude-code"
            ) from e
        except subprocess.TimeoutExpired as e:
            raise ProviderError(f"claude CLI error: timed out after {self.timeout}s") from e

        if completed.returncode != 0:
            message = f"claude CLI error: exit status {completed.returncode}"
            stderr = (completed.stderr or "").strip()
            if stderr:
                message += f"\nStderr: {stderr}"
            raise ProviderError(message)

        return completed.stdout.strip()

    def is_available(self) -> bool:
        """Probe ``<binary> -v`` and check the output names the tool."""
        try:
            completed = subprocess.run(
                [self.binary, "-v"],
                capture_output=True,
                text=True,
                timeout=10,
            )
        except (OSError, subprocess.TimeoutExpired):
            return False

        if completed.returncode != 0:
            return False

        output = (completed.stdout + completed.stderr).lower()
        return "claude" in output
