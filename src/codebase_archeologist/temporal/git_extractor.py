"""Run git as an async subprocess."""

import asyncio
from pathlib import Path

from ..exceptions import GitCommandError
from ..logging_config import get_logger

logger = get_logger(__name__)

# Output above this size is discarded and the query reported as failed.
MAX_OUTPUT_BYTES = 5 * 1024 * 1024


class GitRunner:
    """Issues git commands against one work tree."""

    def __init__(self, repo_path: Path, timeout: float = 30):
        self.repo_path = str(Path(repo_path).resolve())
        self.timeout = timeout

    async def run(self, *args: str) -> str:
        """Run ``git -C <repo> <args>`` and return stdout.

        Raises:
            GitCommandError: git is missing, exits non-zero, times out or
                produces more than MAX_OUTPUT_BYTES.
        """
        cmd = ["git", "-C", self.repo_path, *args]
        try:
            proc = await asyncio.create_subprocess_exec(
                *cmd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise GitCommandError(cmd, f"cannot start git: {e}")

        try:
            stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=self.timeout)
        except asyncio.TimeoutError:
            proc.kill()
            await proc.wait()
            raise GitCommandError(cmd, f"timed out after {self.timeout}s")

        if proc.returncode != 0:
            reason = stderr.decode("utf-8", errors="replace").strip()
            raise GitCommandError(cmd, reason or "non-zero exit", returncode=proc.returncode)
        if len(stdout) > MAX_OUTPUT_BYTES:
            raise GitCommandError(
                cmd, f"output exceeded {MAX_OUTPUT_BYTES // (1024 * 1024)}MB limit"
            )
        return stdout.decode("utf-8", errors="replace")

    async def is_work_tree(self) -> bool:
        try:
            out = await self.run("rev-parse", "--is-inside-work-tree")
        except GitCommandError as e:
            logger.debug(f"No usable git work tree: {e}")
            return False
        return out.strip() == "true"
