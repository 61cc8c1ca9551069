"""Tests for prompt building and the LLM deadline (DraftGenerator)."""

import pytest

from src.scribe.core.exceptions import EmptyResponse, GenerationTimeout, NoCommitsFound, SafetyBlocked
from src.scribe.integrations.github import CommitRecord
from src.scribe.services.draft_generator import (
    CATEGORIES,
    DraftGenerator,
    build_prompt,
    format_commit,
)
from tests.factories import commit_sha
from tests.fakes import FakeLLMProvider, make_commits

pytestmark = pytest.mark.unit


def commit(message: str, seed: int = 1) -> CommitRecord:
    return CommitRecord(
        sha=commit_sha(seed),
        message=message,
        author_name="Ada",
        author_email="ada@example.com",
        timestamp="2024-03-01T12:00:00Z",
    )


class TestPrompt:
    def test_format_commit_numbers_and_abbreviates(self):
        line = format_commit(3, commit("fix: handle empty repos", seed=0xABC))

        assert line == f"3. fix: handle empty repos ({commit_sha(0xABC)[:7]})"

    def test_format_commit_indents_body(self):
        line = format_commit(1, commit("feat: export\n\nAdds CSV export.\nCloses #12\n"))

        assert line.splitlines() == [
            f"1. feat: export ({commit_sha(1)[:7]})",
            "   Adds CSV export.",
            "   Closes #12",
        ]

    def test_prompt_lists_every_commit_in_order(self):
        commits = make_commits(3)

        prompt = build_prompt(commits)

        assert "3 total" in prompt
        positions = [prompt.index(f"change number {i}") for i in (3, 2, 1)]
        assert positions == sorted(positions)

    def test_prompt_names_categories(self):
        prompt = build_prompt(make_commits(1))

        for category in CATEGORIES:
            assert category in prompt


class TestGenerateDraft:
    """Tests for DraftGenerator.generate_draft."""

    async def test_returns_trimmed_text(self):
        llm = FakeLLMProvider(text="\n\n## Features\n- Add widgets\n  ")

        text = await DraftGenerator(llm).generate_draft(make_commits(2))

        assert text == "## Features\n- Add widgets"
        assert len(llm.prompts) == 1

    async def test_no_commits_skips_model(self):
        llm = FakeLLMProvider()

        with pytest.raises(NoCommitsFound):
            await DraftGenerator(llm).generate_draft([])

        assert llm.prompts == []

    async def test_timeout(self):
        llm = FakeLLMProvider(delay=1.0)

        with pytest.raises(GenerationTimeout):
            await DraftGenerator(llm, timeout_seconds=0.01).generate_draft(make_commits(1))

    async def test_whitespace_only_output_is_empty(self):
        llm = FakeLLMProvider(text="   \n\t")

        with pytest.raises(EmptyResponse):
            await DraftGenerator(llm).generate_draft(make_commits(1))

    async def test_provider_errors_propagate(self):
        llm = FakeLLMProvider(error=SafetyBlocked())

        with pytest.raises(SafetyBlocked):
            await DraftGenerator(llm).generate_draft(make_commits(1))
