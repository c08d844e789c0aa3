"""Tests for the shared prompt template, response cleanup and registry."""

import unittest

from goco.errors import ProviderError, ValidationError
from goco.providers import GeminiProvider, GroqProvider, create_provider
from goco.providers.base import build_prompt, clean_commit_message, strip_thinking_tags


class TestBuildPrompt(unittest.TestCase):
    def test_status_and_diff_embedded_verbatim(self) -> None:
        status = " M src/app.py\n?? notes.txt\n"
        diff = "diff --git a/src/app.py b/src/app.py\n-    return {x}\n+    return {y}  # %s\n"
        prompt = build_prompt(status, diff)
        self.assertIn(f"Git Status:\n{status}\n\n", prompt)
        self.assertIn(f"Git Diff:\n{diff}\n\n", prompt)

    def test_rules_are_included(self) -> None:
        prompt = build_prompt("s", "d")
        self.assertTrue(prompt.startswith("Generate a Conventional Commit"))
        self.assertIn("- Output MUST be plain text only.", prompt)
        self.assertIn("conventional-commits-cheatsheet.md", prompt)
        self.assertNotIn("Additional Instructions", prompt)

    def test_custom_instructions_appended(self) -> None:
        prompt = build_prompt("s", "d", "Mention the ticket ABC-1.")
        self.assertTrue(prompt.endswith("\n\nAdditional Instructions:\nMention the ticket ABC-1.\n"))


class TestCleanup(unittest.TestCase):
    def test_strip_thinking_tags_variants(self) -> None:
        for tag in ("think", "thinking", "thought", "reasoning", "THINK"):
            text = f"<{tag}>step 1\nstep 2</{tag}>\n\nfeat: add x"
            self.assertEqual(strip_thinking_tags(text), "feat: add x")

    def test_clean_commit_message_unwraps_fence(self) -> None:
        self.assertEqual(clean_commit_message("```text\nfix: typo\n```"), "fix: typo")
        self.assertEqual(clean_commit_message("```\nfix: typo\n\nbody\n```"), "fix: typo\n\nbody")

    def test_clean_commit_message_plain(self) -> None:
        self.assertEqual(clean_commit_message("  chore: bump\n"), "chore: bump")


class TestCreateProvider(unittest.TestCase):
    def test_known_providers(self) -> None:
        self.assertIsInstance(create_provider("gemini", "key", "gemini-2.5-flash"), GeminiProvider)
        groq = create_provider("groq", "", "llama-3.3-70b-versatile")
        self.assertIsInstance(groq, GroqProvider)
        self.assertEqual(groq.model, "llama-3.3-70b-versatile")

    def test_unknown_provider(self) -> None:
        with self.assertRaises(ValidationError) as ctx:
            create_provider("openai", "key", "gpt")
        self.assertEqual(ctx.exception.field, "provider")

    def test_construction_failure_is_provider_error(self) -> None:
        with self.assertRaises(ProviderError):
            create_provider("gemini", "", "gemini-2.5-flash")


if __name__ == "__main__":
    unittest.main()
