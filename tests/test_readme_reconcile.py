from __future__ import annotations

import unittest

from _testutil import TEMPLATE_README, ensure_repo_on_path


START = "<!-- QUICK_INSTALL_START -->"
END = "<!-- QUICK_INSTALL_END -->"
BLOCK = f"{START}\nnew install text\n{END}"
SHORT = f"# proj\n\n## Quick install\n\n{BLOCK}\n"
PLACEHOLDERS = {"__REPO_NAME__": "proj", "__DOWNLOAD_CMD__": "curl x | bash", "__DL_SH_SHA256__": "abc"}


class TestBlockEditing(unittest.TestCase):
    def test_replace_preserves_outside_content(self) -> None:
        ensure_repo_on_path()

        from s2j.bootstrap.readme import replace_block

        out = replace_block(TEMPLATE_README, BLOCK)
        before, rest = TEMPLATE_README.split(START, 1)
        _, after = rest.split(END, 1)

        self.assertTrue(out.startswith(before))
        self.assertTrue(out.endswith(after))
        self.assertIn("new install text", out)
        self.assertNotIn("placeholder install text", out)
        self.assertEqual(out.count(START), 1)
        self.assertEqual(out.count(END), 1)

    def test_second_replacement_is_stable(self) -> None:
        ensure_repo_on_path()

        from s2j.bootstrap.readme import replace_block

        once = replace_block(TEMPLATE_README, BLOCK)
        twice = replace_block(once, BLOCK)
        self.assertEqual(once, twice)
        self.assertEqual(once.index(START), twice.index(START))

    def test_replace_keeps_crlf_and_missing_final_newline(self) -> None:
        ensure_repo_on_path()

        from s2j.bootstrap.readme import replace_block

        doc = f"head\r\n{START}\r\nold\r\n{END}\r\ntail\r\n"
        out = replace_block(doc, BLOCK)
        self.assertEqual(out, "head\r\n" + BLOCK.replace("\n", "\r\n") + "\r\ntail\r\n")
        self.assertNotIn("\n", out.replace("\r\n", ""))

        doc = f"head\n{START}\nold\n{END}"
        self.assertEqual(replace_block(doc, BLOCK), f"head\n{BLOCK}")

    def test_replace_without_markers_raises(self) -> None:
        ensure_repo_on_path()

        from s2j.bootstrap.readme import replace_block

        with self.assertRaises(ValueError):
            replace_block("no markers\n", BLOCK)
        with self.assertRaises(ValueError):
            replace_block(f"{END}\n{START}\n", BLOCK)

    def test_append_adds_exactly_one_block(self) -> None:
        ensure_repo_on_path()

        from s2j.bootstrap.readme import append_block, has_block, replace_block

        doc = "# Title\n\nSome text without a final newline"
        out = append_block(doc, BLOCK)
        self.assertTrue(out.startswith(doc + "\n"))
        self.assertEqual(out.count(START), 1)
        self.assertEqual(out.count("Some text"), 1)
        self.assertIn("## Quick install", out)
        self.assertTrue(has_block(out))
        # Once appended, later runs patch in place.
        self.assertEqual(replace_block(out, BLOCK), out)


class TestReconcileReadme(unittest.TestCase):
    def _reconcile(self, document, *, first_run, regen=False, replace=True):
        from s2j.bootstrap.readme import reconcile_readme

        return reconcile_readme(
            document,
            BLOCK,
            first_run,
            regen,
            replace=replace,
            short_readme=SHORT,
            placeholders=PLACEHOLDERS,
        )

    def test_missing_readme_is_materialized(self) -> None:
        ensure_repo_on_path()

        for first_run in (True, False):
            out = self._reconcile(None, first_run=first_run)
            self.assertEqual(out.action, "replace")
            self.assertEqual(out.text, SHORT)
            self.assertFalse(out.backup)

    def test_first_run_replace_backs_up(self) -> None:
        ensure_repo_on_path()

        out = self._reconcile(TEMPLATE_README, first_run=True, replace=True)
        self.assertEqual(out.action, "replace")
        self.assertTrue(out.backup)
        self.assertEqual(out.text, SHORT)

    def test_first_run_keep_patches_or_appends(self) -> None:
        ensure_repo_on_path()

        out = self._reconcile(TEMPLATE_README, first_run=True, replace=False)
        self.assertEqual(out.action, "patch_block")
        self.assertFalse(out.backup)
        self.assertIn("new install text", out.text)

        out = self._reconcile("# Plain\n", first_run=True, replace=False)
        self.assertEqual(out.action, "append_block")

    def test_rerun_only_refreshes_block(self) -> None:
        ensure_repo_on_path()

        # `replace` is ignored once bootstrapped.
        out = self._reconcile(TEMPLATE_README, first_run=False, replace=True)
        self.assertEqual(out.action, "patch_block")
        self.assertIn("Template guide. Keep this text.", out.text)

    def test_rerun_with_placeholders_substitutes(self) -> None:
        ensure_repo_on_path()

        doc = "# __REPO_NAME__\n\nRun `__DOWNLOAD_CMD__` (sha __DL_SH_SHA256__).\nLiteral __REPO_NAME__ stays.\n"
        out = self._reconcile(doc, first_run=False)
        self.assertEqual(out.action, "substitute_placeholders")
        self.assertEqual(out.text, "# proj\n\nRun `curl x | bash` (sha abc).\nLiteral __REPO_NAME__ stays.\n")

    def test_rerun_without_block_or_placeholders_appends(self) -> None:
        ensure_repo_on_path()

        out = self._reconcile("# Hand written\n", first_run=False)
        self.assertEqual(out.action, "append_block")

    def test_regen_behaves_like_first_run(self) -> None:
        ensure_repo_on_path()

        out = self._reconcile(TEMPLATE_README, first_run=False, regen=True, replace=True)
        self.assertEqual(out.action, "replace")
        self.assertTrue(out.backup)


if __name__ == "__main__":
    unittest.main()
