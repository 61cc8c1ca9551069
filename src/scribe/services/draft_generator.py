"""Draft generator - turns commits into changelog text via an LLM."""

import asyncio
from collections.abc import Sequence

from src.scribe.core.exceptions import EmptyResponse, GenerationTimeout, NoCommitsFound
from src.scribe.core.logging import get_logger
from src.scribe.integrations.gemini import LLMProvider
from src.scribe.integrations.github import CommitRecord

logger = get_logger(__name__)

CATEGORIES = ("Features", "Bug Fixes", "Improvements", "Documentation", "Chores")

PROMPT_TEMPLATE = """\
You are an expert technical writer creating a professional changelog from commit messages.

COMMITS TO PROCESS ({count} total, most recent first):
{commits}

INSTRUCTIONS:
- Produce a changelog in markdown format
- Categorize each entry under one of: {categories}
- Skip commits that are not user-facing (merge commits, typo fixes, WIP, version bumps)
- Rewrite every kept message in a consistent, professional tone, in present tense
- Keep the chronological order of the commits (most recent first) within each category
- Start each entry with an action verb (Add, Fix, Improve, Update, Remove)

FORMAT EXAMPLE:
## Features
- Add user authentication with OAuth2 integration

## Bug Fixes
- Fix file uploads timing out on slow connections

## Improvements
- Improve search performance on large projects

## Documentation
- Add API reference for the export endpoints

## Chores
- Update dependencies to latest versions

IMPORTANT:
- Do NOT include commit hashes or author names in the output
- Omit empty categories
- Return only the changelog markdown
"""


def format_commit(index: int, commit: CommitRecord) -> str:
    """Render one commit as a numbered line, with any body indented below it."""
    subject, _, body = commit.message.strip().partition("\n")
    line = f"{index}. {subject.strip()} ({commit.short_sha})"
    body_lines = [b.strip() for b in body.strip().splitlines() if b.strip()]
    if body_lines:
        line += "\n" + "\n".join(f"   {b}" for b in body_lines)
    return line


def build_prompt(commits: Sequence[CommitRecord]) -> str:
    return PROMPT_TEMPLATE.format(
        count=len(commits),
        commits="\n".join(format_commit(i, c) for i, c in enumerate(commits, start=1)),
        categories=" / ".join(CATEGORIES),
    )


class DraftGenerator:
    """Invokes the LLM with a hard deadline.

    Only the surrounding whitespace of the model output is trimmed; the
    model's wording and categorization are kept as-is.
    """

    def __init__(self, provider: LLMProvider, timeout_seconds: float = 15.0):
        self.provider = provider
        self.timeout_seconds = timeout_seconds

    async def generate_draft(self, commits: Sequence[CommitRecord]) -> str:
        """Raises GenerationTimeout if the model does not answer within timeout_seconds."""
        if not commits:
            raise NoCommitsFound()

        prompt = build_prompt(commits)
        try:
            text = await asyncio.wait_for(
                self.provider.generate(prompt), timeout=self.timeout_seconds
            )
        except TimeoutError as e:
            logger.warning(
                "Draft generation timed out",
                timeout_seconds=self.timeout_seconds,
                commit_count=len(commits),
            )
            raise GenerationTimeout() from e

        text = (text or "").strip()
        if not text:
            raise EmptyResponse()
        return text
