"""Git repository access via the git command line.

Query methods treat git failures (no repository, unknown revision, git
not installed) as absence and return ``None`` or an empty list. Methods
that change the repository raise :class:`~nextver.exceptions.GitError`.
"""

from __future__ import annotations

import logging
import re
import subprocess
from pathlib import Path

from nextver.exceptions import GitError

logger = logging.getLogger(__name__)

# sha, subject and body separated by the unit separator, records
# terminated by the record separator so multi-line bodies stay intact.
LOG_FORMAT = "%H%x1f%s%x1f%b%x1e"
RECORD_SEPARATOR = "\x1e"

TAG_SORT_KEYS: tuple[str, ...] = (
    "-version:refname",
    "-v:refname",
    "-refname",
    "-creatordate",
)


class GitRepository:
    """A local git working copy."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def _run(self, *args: str) -> str:
        result = subprocess.run(
            ["git", *args],
            capture_output=True,
            text=True,
            encoding="utf-8",
            check=True,
            cwd=self.path,
        )
        return result.stdout.strip()

    def _query(self, *args: str) -> str | None:
        try:
            return self._run(*args)
        except (subprocess.CalledProcessError, OSError) as e:
            stderr = getattr(e, "stderr", None) or str(e)
            logger.debug("git %s failed: %s", " ".join(args), stderr.strip())
            return None

    def get_last_tag(self) -> str | None:
        """Return the most recent tag reachable from HEAD, as named in git."""
        return self._query("describe", "--tags", "--abbrev=0") or None

    def get_commits(self, rev_range: str) -> list[str]:
        """Return raw ``sha\\x1fsubject\\x1fbody`` records, newest first.

        Args:
            rev_range: Revision range such as ``v1.0.0..HEAD`` or ``HEAD``
        """
        output = self._query("log", rev_range, f"--pretty=format:{LOG_FORMAT}")
        if not output:
            return []
        records = (record.strip("\n") for record in output.split(RECORD_SEPARATOR))
        return [record for record in records if record]

    def get_commits_between(self, from_ref: str | None, to_ref: str = "HEAD") -> list[str]:
        """Return records for ``from_ref..to_ref``, or all of ``to_ref`` when unbounded."""
        rev_range = f"{from_ref}..{to_ref}" if from_ref else to_ref
        return self.get_commits(rev_range)

    def get_all_tags(self) -> list[str]:
        """Return every tag, newest version first.

        Older git versions lack some sort keys, so each key is tried in turn.
        """
        for sort_key in TAG_SORT_KEYS:
            output = self._query("tag", f"--sort={sort_key}")
            if output is None:
                logger.debug("Tag sort %r not supported", sort_key)
                continue
            tags = [tag.strip() for tag in output.splitlines() if tag.strip()]
            if tags:
                return tags
        return []

    def get_tag_date(self, tag: str) -> str | None:
        """Return the ISO 8601 committer date of the commit a tag points at."""
        return self._query("log", "-1", "--format=%cI", tag) or None

    def tag_exists(self, tag: str) -> bool:
        return self._query("rev-parse", "--verify", "--quiet", f"refs/tags/{tag}") is not None

    def get_remote_url(self, remote: str = "origin") -> str | None:
        return self._query("remote", "get-url", remote) or None

    def get_default_branch(self, remote: str = "origin", fallback: str = "main") -> str:
        """Return the remote's HEAD branch, or ``fallback`` when unknown."""
        output = self._query("remote", "show", remote)
        match = re.search(r"HEAD branch: (\S+)", output or "")
        return match.group(1) if match else fallback

    def create_tag(self, tag: str) -> None:
        """Create a lightweight tag at HEAD.

        Raises:
            GitError: If git refuses to create the tag
        """
        self._mutate("tag", tag)

    def push_tag(self, tag: str, remote: str = "origin") -> None:
        """Push a tag to ``remote``.

        Raises:
            GitError: If the push fails
        """
        self._mutate("push", remote, tag)

    def _mutate(self, *args: str) -> None:
        try:
            self._run(*args)
        except subprocess.CalledProcessError as e:
            raise GitError(
                f"git {' '.join(args)} failed with exit code {e.returncode}",
                stderr=e.stderr,
            ) from e
        except OSError as e:
            raise GitError(f"git {' '.join(args)} could not be run: {e}") from e
