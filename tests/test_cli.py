"""Tests for cli.py"""

import io
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from concat_md.cli import build_parser, config_from_args, main, split_strings


class TestSplitStrings(unittest.TestCase):
    def test_splits_and_trims(self):
        self.assertEqual(split_strings("a/**, b/*.md ,c"), ["a/**", "b/*.md", "c"])

    def test_empty(self):
        self.assertEqual(split_strings(None), [])
        self.assertEqual(split_strings(""), [])


class TestConfigFromArgs(unittest.TestCase):
    def test_flags_map_to_config(self):
        args = build_parser().parse_args([
            "docs",
            "--toc", "--toc-level", "2",
            "--title", "Manual",
            "--ignore", "drafts/**,tmp/*",
            "--decrease-title-levels",
            "--start-title-level-at", "2",
            "--join-string", "***",
            "--title-key", "title",
            "--file-name-as-title",
            "--dir-name-as-title",
        ])
        config = config_from_args(args)
        self.assertTrue(config.toc)
        self.assertEqual(config.toc_level, 2)
        self.assertEqual(config.title, "Manual")
        self.assertEqual(config.ignore, ("drafts/**", "tmp/*"))
        self.assertEqual(config.include, ("**/*.md",))
        self.assertTrue(config.decrease_title_levels)
        self.assertEqual(config.start_title_level_at, 2)
        self.assertEqual(config.join_separator, "\n***\n")
        self.assertEqual(config.title_key, "title")
        self.assertTrue(config.file_name_as_title)
        self.assertTrue(config.dir_name_as_title)


class TestMain(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.root = Path(self.tmpdir.name).resolve()
        (self.root / "sub").mkdir()
        (self.root / "a.md").write_text("# A\n")
        (self.root / "sub" / "b.md").write_text("[link](../a.md)")

    def tearDown(self):
        self.tmpdir.cleanup()

    def run_main(self, argv):
        stdout, stderr = io.StringIO(), io.StringIO()
        with patch("sys.stdout", stdout), patch("sys.stderr", stderr):
            main(argv)
        return stdout.getvalue(), stderr.getvalue()

    def test_writes_result_to_stdout(self):
        out, err = self.run_main([str(self.root), "--dir-name-as-title", "--file-name-as-title"])
        self.assertEqual(out, "# A\n\n# A\n\n# Sub\n\n## B\n\n[link](#a)")
        self.assertEqual(err, "")

    def test_output_file(self):
        output = self.root / "out" / "README.md"
        output.parent.mkdir()
        out, err = self.run_main([str(self.root), "-o", str(output), "-v"])
        self.assertEqual(out, "")
        self.assertIn("[link](#amd)", output.read_text())
        self.assertIn("Concatenated 2 files", err)

    def test_missing_path_exits_with_error(self):
        """Runtime errors print a short message and exit 1."""
        with self.assertRaises(SystemExit) as ctx:
            self.run_main([str(self.root / "missing")])
        self.assertEqual(ctx.exception.code, 1)

    def test_error_message_on_stderr(self):
        stderr = io.StringIO()
        with patch("sys.stderr", stderr), self.assertRaises(SystemExit):
            main([str(self.root / "missing")])
        self.assertTrue(stderr.getvalue().startswith("Error: Not found"))

    def test_debug_reraises(self):
        with self.assertRaises(FileNotFoundError):
            self.run_main([str(self.root / "missing"), "--debug"])

    def test_unknown_option_is_usage_error(self):
        with self.assertRaises(SystemExit) as ctx:
            self.run_main([str(self.root), "--bogus"])
        self.assertEqual(ctx.exception.code, 2)

    def test_path_required(self):
        with self.assertRaises(SystemExit) as ctx:
            self.run_main([])
        self.assertEqual(ctx.exception.code, 2)

    def test_undecodable_file_is_reported(self):
        """A file that is not UTF-8 gives an error line, not a traceback."""
        (self.root / "bad.md").write_bytes(b"\xff\xfe bad")
        stderr = io.StringIO()
        with patch("sys.stderr", stderr), self.assertRaises(SystemExit) as ctx:
            main([str(self.root)])
        self.assertEqual(ctx.exception.code, 1)
        self.assertIn("bad.md", stderr.getvalue())

    def test_bad_output_path_is_reported(self):
        output = self.root / "missing" / "out.md"
        with self.assertRaises(SystemExit) as ctx:
            self.run_main([str(self.root), "-o", str(output)])
        self.assertEqual(ctx.exception.code, 1)

    def test_invalid_level_is_reported(self):
        with self.assertRaises(SystemExit) as ctx:
            self.run_main([str(self.root), "--toc-level", "0"])
        self.assertEqual(ctx.exception.code, 1)


if __name__ == "__main__":
    unittest.main()
