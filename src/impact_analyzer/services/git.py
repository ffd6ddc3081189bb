"""Git access for per-repository analyzers.

Wraps the git CLI with asyncio subprocesses so several repositories
can be analyzed concurrently.
"""

import asyncio
from pathlib import Path

from loguru import logger

from impact_analyzer.errors import GitError


class GitClient:
    """Read-only git operations against one repository."""

    def __init__(self, repo_path: Path, timeout_seconds: float = 60.0) -> None:
        """
        Initialize client.

        Args:
            repo_path: Repository working tree.
            timeout_seconds: Per-command timeout.
        """
        self.repo_path = repo_path
        self.timeout = timeout_seconds

    async def run(self, *args: str) -> str:
        """
        Run a git command and return its stdout.

        Raises:
            GitError: If git is missing, times out, or exits non-zero.
        """
        command = ["git", *args]
        try:
            proc = await asyncio.create_subprocess_exec(
                *command,
                cwd=str(self.repo_path),
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except (FileNotFoundError, NotADirectoryError) as e:
            raise GitError(f"Cannot run git: {e}", str(self.repo_path), command) from e

        try:
            stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=self.timeout)
        except TimeoutError as e:
            proc.kill()
            await proc.wait()
            raise GitError(
                f"git timed out after {self.timeout}s", str(self.repo_path), command
            ) from e

        if proc.returncode != 0:
            message = stderr.decode("utf-8", errors="replace").strip()
            raise GitError(
                message or f"git exited with {proc.returncode}", str(self.repo_path), command
            )

        return stdout.decode("utf-8", errors="replace")

    async def changed_files(self, base_ref: str, head_ref: str) -> list[str]:
        """
        List files changed between two refs.

        Tries the merge-base form ``base...head`` first and falls back to
        a plain two-ref diff.

        Raises:
            GitError: If both forms fail.
        """
        try:
            output = await self.run("diff", "--name-only", f"{base_ref}...{head_ref}")
        except GitError as e:
            logger.debug("Three-dot diff failed in {}: {}", self.repo_path, e)
            output = await self.run("diff", "--name-only", base_ref, head_ref)

        return [line.strip() for line in output.splitlines() if line.strip()]

    async def file_diff(self, file_path: str, base_ref: str, head_ref: str) -> str:
        """Unified diff of one file, or an empty string if git cannot produce it."""
        try:
            return await self.run("diff", "-U3", f"{base_ref}...{head_ref}", "--", file_path)
        except GitError as e:
            logger.debug("No diff for {}: {}", file_path, e)
            return ""

    async def show_file(self, ref: str, file_path: str) -> str | None:
        """File content at a ref, or None if it does not exist there."""
        try:
            return await self.run("show", f"{ref}:{file_path}")
        except GitError:
            return None

    def read_file(self, file_path: str) -> str | None:
        """Working-tree file content, or None if missing."""
        full_path = self.repo_path / file_path
        if not full_path.is_file():
            return None
        return full_path.read_text(encoding="utf-8", errors="replace")
