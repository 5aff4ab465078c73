import tempfile
import unittest
from pathlib import Path

import generate_diagnostic_codes


class GenerateDiagnosticCodesTest(unittest.TestCase):
    def test_generates_markdown_grouped_by_rule(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            repo_root = Path(tmpdir)
            src = repo_root / generate_diagnostic_codes.CATALOG
            src.parent.mkdir(parents=True)

            src.write_text(
                """
version: 1
codes:
  - code: DIRTY_REPO
    severity: error
    rule: source.git.dirty
    message: The cached clone has uncommitted changes.
    hint: Commit or discard them.
  - code: NO_MANIFEST_FOUND
    severity: error
    rule: precondition.manifest
    message: elm.json could not be found.
""".lstrip(),
                encoding="utf-8",
            )

            out = generate_diagnostic_codes.generate(repo_root)

            text = out.read_text(encoding="utf-8")
            self.assertEqual(out, repo_root / "docs" / "reference" / "diagnostic-codes.md")
            self.assertIn("Generated file. Do not edit directly.", text)
            self.assertIn("## precondition", text)
            self.assertIn("## source", text)
            self.assertIn("`DIRTY_REPO`", text)

    def test_bundled_catalog_renders(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            repo_root = Path(tmpdir)
            src = repo_root / generate_diagnostic_codes.CATALOG
            src.parent.mkdir(parents=True)
            bundled = generate_diagnostic_codes.REPO_ROOT / generate_diagnostic_codes.CATALOG
            src.write_text(bundled.read_text(encoding="utf-8"), encoding="utf-8")

            text = generate_diagnostic_codes.generate(repo_root).read_text(encoding="utf-8")
            self.assertIn("`SIDELOADS_UNAVAILABLE`", text)


if __name__ == "__main__":
    unittest.main()
