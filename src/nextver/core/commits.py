"""Conventional commit classification.

A raw commit record is decoded into a :class:`Commit` and classified into
a :class:`~nextver.core.version.BumpType`. Classification is total over
all string input: anything that is not a recognized conventional header
classifies as ``none`` rather than failing.

The module is pure. It performs no I/O and does not log.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from nextver.core.version import BumpType

if TYPE_CHECKING:
    from collections.abc import Iterable

# Field separator used by the commit retrieval format (ASCII unit separator).
FIELD_SEPARATOR = "\x1f"

# Types that participate in version bumps.
COMMIT_TYPES: tuple[str, ...] = (
    "feat",
    "fix",
    "refactor",
    "docs",
    "chore",
    "style",
    "test",
    "build",
    "perf",
    "ci",
    "cleanup",
    "remove",
)

# Changelog buckets in display order. "raw" is display-only and never bumps.
CATEGORY_ORDER: tuple[str, ...] = (
    "breaking",
    "feat",
    "fix",
    "refactor",
    "chore",
    "docs",
    "style",
    "test",
    "build",
    "perf",
    "ci",
    "raw",
    "cleanup",
    "remove",
)

TYPE_BUMPS: dict[str, BumpType] = {
    "feat": BumpType.MINOR,
    "fix": BumpType.PATCH,
}

_EMOJI_CHARS = (
    "\u00a9\u00ae\u203c\u2049\u2122\u2139\u2194-\u21aa\u231a-\u23ff\u24c2"
    "\u25aa-\u27bf\u2934\u2935\u2b05-\u2b55\u3030\u303d\u3297\u3299"
    "\U0001f000-\U0001faff\ufe0f\u200d\u20e3"
)

# One leading ":shortcode:" or run of emoji, plus trailing whitespace.
MARKER_PATTERN: re.Pattern[str] = re.compile(rf"^(?::[\w+-]+:|[{_EMOJI_CHARS}]+)\s*")

REVERT_PATTERN: re.Pattern[str] = re.compile(r"^revert\b", re.IGNORECASE)

BREAKING_PATTERN: re.Pattern[str] = re.compile(r"BREAKING CHANGE", re.IGNORECASE)

HEADER_PATTERN: re.Pattern[str] = re.compile(
    r"^(?P<type>" + "|".join(t for t in CATEGORY_ORDER if t != "breaking") + r")"
    r"(?:\((?P<scope>[^)]*)\))?"
    r"(?P<breaking>!)?"
    r":\s*(?P<description>.*)$",
    re.IGNORECASE | re.DOTALL,
)


@dataclass(frozen=True)
class Commit:
    """A single commit as delivered by the history collaborator."""

    sha: str
    subject: str = ""
    body: str = ""

    @classmethod
    def decode(cls, record: str) -> Commit:
        """Decode one ``sha\\x1fsubject\\x1fbody`` record.

        The record always yields three fields. Missing trailing fields are
        empty, and separators inside the body are left in place.
        """
        fields = record.split(FIELD_SEPARATOR, 2)
        fields.extend([""] * (3 - len(fields)))
        sha, subject, body = fields
        return cls(sha=sha, subject=subject, body=body)


@dataclass(frozen=True)
class ClassifiedCommit:
    """A commit together with its changelog category and bump signal."""

    commit: Commit
    category: str
    scope: str | None
    description: str
    is_breaking: bool
    bump: BumpType

    @property
    def sha(self) -> str:
        return self.commit.sha


def strip_marker(subject: str) -> str:
    """Remove one leading ``:shortcode:`` or emoji block from a subject."""
    return MARKER_PATTERN.sub("", subject, count=1)


def normalize_subject(subject: str) -> str:
    """Trim a subject and remove its leading marker, as classification sees it."""
    return strip_marker(subject.strip())


def _match_bump_header(subject: str) -> re.Match[str] | None:
    match = HEADER_PATTERN.match(subject)
    if match and match.group("type").lower() in COMMIT_TYPES:
        return match
    return None


def classify(commit: Commit) -> BumpType:
    """Map one commit to the version bump it implies.

    Reverts never bump. A ``BREAKING CHANGE`` body or a ``!`` header is
    always major. Otherwise ``feat`` is minor, ``fix`` is patch and every
    other subject is ``none``.

    Args:
        commit: Commit to classify

    Returns:
        The bump signal for this commit
    """
    subject = normalize_subject(commit.subject)
    if REVERT_PATTERN.match(subject):
        return BumpType.NONE

    header = _match_bump_header(subject)
    if BREAKING_PATTERN.search(commit.body) or (header and header.group("breaking")):
        return BumpType.MAJOR
    if header is None:
        return BumpType.NONE

    return TYPE_BUMPS.get(header.group("type").lower(), BumpType.NONE)


def _capitalize(text: str) -> str:
    return text[:1].upper() + text[1:]


def analyze_commit(commit: Commit) -> ClassifiedCommit:
    """Classify a commit and derive its changelog presentation.

    Breaking commits go to the ``breaking`` category. Reverts and subjects
    without a recognized header go to ``chore``.
    """
    bump = classify(commit)
    subject = normalize_subject(commit.subject)
    header = None if REVERT_PATTERN.match(subject) else HEADER_PATTERN.match(subject)

    if header:
        description = header.group("description").strip()
        scope = header.group("scope") or None
        category = header.group("type").lower()
    else:
        description = subject
        scope = None
        category = "chore"

    is_breaking = bump == BumpType.MAJOR
    if is_breaking:
        category = "breaking"

    return ClassifiedCommit(
        commit=commit,
        category=category,
        scope=scope,
        description=_capitalize(description) or commit.subject,
        is_breaking=is_breaking,
        bump=bump,
    )


def analyze_commits(commits: Iterable[Commit]) -> list[ClassifiedCommit]:
    """Analyze a sequence of commits, preserving order."""
    return [analyze_commit(commit) for commit in commits]


def decode_commits(records: Iterable[str]) -> list[Commit]:
    """Decode raw records, skipping blank ones."""
    return [Commit.decode(record) for record in records if record.strip()]
