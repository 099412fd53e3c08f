from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from _testutil import FakePrompter, FakeVcs, ensure_repo_on_path


class TestParseRemote(unittest.TestCase):
    def test_supported_remote_forms(self) -> None:
        ensure_repo_on_path()

        from s2j.bootstrap.resolve import parse_github_remote

        self.assertEqual(parse_github_remote("https://github.com/acme/proj.git"), ("acme", "proj"))
        self.assertEqual(parse_github_remote("https://github.com/acme/proj"), ("acme", "proj"))
        self.assertEqual(parse_github_remote("git@github.com:acme/proj.git"), ("acme", "proj"))
        self.assertEqual(parse_github_remote("ssh://git@github.com/acme/my.proj.git"), ("acme", "my.proj"))
        self.assertEqual(parse_github_remote("https://gitlab.com/acme/proj.git"), ("", ""))
        self.assertEqual(parse_github_remote(""), ("", ""))


class TestResolveConfiguration(unittest.TestCase):
    def test_explicit_flags_win_without_prompting(self) -> None:
        ensure_repo_on_path()

        from s2j.bootstrap.resolve import resolve_configuration
        from s2j.models import InitFlags

        prompter = FakePrompter(["ignored", "ignored", "ignored"])
        with tempfile.TemporaryDirectory() as td:
            cfg = resolve_configuration(
                InitFlags(user="acme", repo="proj", domain="tools.acme.dev"),
                root=Path(td),
                vcs=FakeVcs(remote="https://github.com/other/thing.git"),
                prompter=prompter,
            )
        self.assertEqual((cfg.owner, cfg.repo_name, cfg.domain), ("acme", "proj", "tools.acme.dev"))
        self.assertEqual(prompter.questions, [])

    def test_inferred_from_remote_and_cname_when_non_interactive(self) -> None:
        ensure_repo_on_path()

        from s2j.bootstrap.resolve import resolve_configuration
        from s2j.models import InitFlags

        with tempfile.TemporaryDirectory() as td:
            root = Path(td)
            (root / "dl-util").mkdir()
            (root / "dl-util" / "CNAME").write_text("# comment\n\ntools.acme.dev\nignored.dev\n", encoding="utf-8")
            prompter = FakePrompter(["nope"])
            cfg = resolve_configuration(
                InitFlags(assume_yes=True),
                root=root,
                vcs=FakeVcs(remote="git@github.com:acme/proj.git", user="Someone Else"),
                prompter=prompter,
            )
        self.assertEqual((cfg.owner, cfg.repo_name, cfg.domain), ("acme", "proj", "tools.acme.dev"))
        self.assertTrue(cfg.assume_yes)
        self.assertEqual(prompter.questions, [])

    def test_root_cname_used_when_util_cname_missing(self) -> None:
        ensure_repo_on_path()

        from s2j.bootstrap.resolve import read_cname

        with tempfile.TemporaryDirectory() as td:
            root = Path(td)
            self.assertEqual(read_cname(root, "dl-util"), "")
            (root / "CNAME").write_text("root.example.org\n", encoding="utf-8")
            self.assertEqual(read_cname(root, "dl-util"), "root.example.org")

    def test_fallbacks_user_name_and_directory(self) -> None:
        ensure_repo_on_path()

        from s2j.bootstrap.resolve import resolve_configuration
        from s2j.models import InitFlags

        with tempfile.TemporaryDirectory() as td:
            root = Path(td) / "my-analysis"
            root.mkdir()
            cfg = resolve_configuration(InitFlags(assume_yes=True), root=root, vcs=FakeVcs(user="octocat"))
        self.assertEqual((cfg.owner, cfg.repo_name, cfg.domain), ("octocat", "my-analysis", ""))

    def test_prompt_answers_override_inferred(self) -> None:
        ensure_repo_on_path()

        from s2j.bootstrap.resolve import resolve_configuration
        from s2j.models import InitFlags

        # Blank answer keeps the inferred default.
        prompter = FakePrompter(["acme", "", "tools.acme.dev"])
        with tempfile.TemporaryDirectory() as td:
            cfg = resolve_configuration(
                InitFlags(),
                root=Path(td),
                vcs=FakeVcs(remote="https://github.com/other/proj.git"),
                prompter=prompter,
            )
        self.assertEqual((cfg.owner, cfg.repo_name, cfg.domain), ("acme", "proj", "tools.acme.dev"))
        self.assertEqual(len(prompter.questions), 3)

    def test_unresolved_owner_fails(self) -> None:
        ensure_repo_on_path()

        from s2j.bootstrap.resolve import resolve_configuration
        from s2j.errors import ConfigurationError
        from s2j.models import InitFlags

        with tempfile.TemporaryDirectory() as td:
            with self.assertRaises(ConfigurationError):
                resolve_configuration(InitFlags(assume_yes=True), root=Path(td), vcs=FakeVcs())
            # No terminal either: still unresolved.
            with self.assertRaises(ConfigurationError):
                resolve_configuration(InitFlags(), root=Path(td), vcs=FakeVcs(), prompter=FakePrompter())


class TestResolveDecision(unittest.TestCase):
    def test_precedence(self) -> None:
        ensure_repo_on_path()

        from s2j.bootstrap.resolve import resolve_decision

        prompter = FakePrompter(["n"])
        self.assertTrue(resolve_decision(override="yes", question="Q?", default=False, prompter=prompter))
        self.assertFalse(resolve_decision(override="0", question="Q?", default=True, prompter=prompter))
        self.assertEqual(prompter.questions, [])

        # Unknown override falls through to the prompt.
        self.assertFalse(resolve_decision(override="maybe", question="Q?", default=True, prompter=prompter))
        self.assertEqual(prompter.questions, ["Q? [Y/n]"])

    def test_blank_answer_and_no_terminal(self) -> None:
        ensure_repo_on_path()

        from s2j.bootstrap.resolve import resolve_decision

        self.assertTrue(resolve_decision(override=None, question="Q?", default=True, prompter=FakePrompter([""])))
        self.assertTrue(resolve_decision(override=None, question="Q?", default=False, prompter=FakePrompter(["yes please"])))
        # No terminal: fallback if given, else default.
        self.assertTrue(resolve_decision(override=None, question="Q?", default=True, prompter=FakePrompter()))
        self.assertFalse(resolve_decision(override=None, question="Q?", default=True, prompter=FakePrompter(), fallback=False))
        self.assertFalse(resolve_decision(override=None, question="Q?", default=True, prompter=None, fallback=False))


if __name__ == "__main__":
    unittest.main()
