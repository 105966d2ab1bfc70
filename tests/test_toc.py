#!/usr/bin/env python3
"""Tests for toc.py"""

import unittest

from concat_md.toc import TOC_TAG, build_toc, has_toc_markers, transform

DOC = f"""# Book

{TOC_TAG}

# Intro

## Setup

### Details

#### Too deep

# Intro
"""


class TestBuildToc(unittest.TestCase):
    def test_nested_relative_to_lowest_level(self):
        lines = build_toc([(2, "A"), (3, "B"), (2, "C")])
        self.assertEqual(lines, ["- [A](#a)", "  - [B](#b)", "- [C](#c)"])

    def test_duplicate_anchors_are_numbered(self):
        lines = build_toc([(1, "Intro"), (1, "Intro"), (1, "Intro")])
        self.assertEqual(lines, ["- [Intro](#intro)", "- [Intro](#intro-1)", "- [Intro](#intro-2)"])

    def test_link_syntax_stripped_from_label(self):
        lines = build_toc([(1, "See [docs](docs.md)")])
        self.assertEqual(lines, ["- [See docs](#see-docs)"])

    def test_empty(self):
        self.assertEqual(build_toc([]), [])


class TestTransform(unittest.TestCase):
    def test_fills_marker_region(self):
        result = transform(DOC, 3)
        self.assertTrue(result.transformed)
        expected_toc = (
            "<!-- START doctoc -->\n\n"
            "- [Intro](#intro)\n"
            "  - [Setup](#setup)\n"
            "    - [Details](#details)\n"
            "- [Intro](#intro-1)\n\n"
            "<!-- END doctoc -->"
        )
        self.assertIn(expected_toc, result.data)

    def test_headings_before_markers_are_skipped(self):
        result = transform(DOC, 3)
        self.assertNotIn("[Book]", result.data)

    def test_level_limit(self):
        result = transform(DOC, 1)
        self.assertNotIn("[Setup]", result.data)
        self.assertIn("- [Intro](#intro)\n- [Intro](#intro-1)", result.data)

    def test_no_markers(self):
        result = transform("# A\n", 3)
        self.assertFalse(result.transformed)
        self.assertEqual(result.data, "# A\n")

    def test_no_headings_keeps_placeholder(self):
        content = f"{TOC_TAG}\n\nplain text\n"
        result = transform(content, 3)
        self.assertFalse(result.transformed)
        self.assertEqual(result.data, content)

    def test_regenerates_existing_toc(self):
        """Running the transform on its own output replaces the old list."""
        first = transform(DOC, 3).data
        second = transform(first, 3)
        self.assertEqual(second.data, first)
        self.assertFalse(second.transformed)

    def test_has_toc_markers(self):
        self.assertTrue(has_toc_markers(DOC))
        self.assertFalse(has_toc_markers("<!-- END doctoc -->\n<!-- START doctoc -->"))


if __name__ == "__main__":
    unittest.main()
