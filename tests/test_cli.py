"""Tests for the command line interface."""

from __future__ import annotations

import io
import json
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path

from folio.cli import main


def _run(argv: list[str]) -> tuple[int, str, str]:
    out, err = io.StringIO(), io.StringIO()
    with redirect_stdout(out), redirect_stderr(err):
        code = main(argv)
    return code, out.getvalue(), err.getvalue()


ARTICLE = "---\ntitle: T\ndate: 2020-01-01\ndescription: D\ntags: [x]\n---\n\nBody\n"


class TestCli(unittest.TestCase):
    def test_css_to_stdout(self) -> None:
        code, out, _ = _run(["css"])
        self.assertEqual(code, 0)
        self.assertIn("tr:nth-child(odd)", out)

    def test_css_to_file_with_token_overrides(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            tokens = Path(td) / "tokens.json"
            tokens.write_text(json.dumps({"padding": "2rem"}), encoding="utf-8")
            out_file = Path(td) / "style.css"
            code, out, _ = _run(["css", "--out", str(out_file), "--tokens", str(tokens)])
            self.assertEqual(code, 0)
            self.assertIn("margin-left: -2rem;", out_file.read_text(encoding="utf-8"))

    def test_css_bad_tokens_file(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            tokens = Path(td) / "tokens.json"
            tokens.write_text(json.dumps({"color_link": "blue"}), encoding="utf-8")
            code, _, err = _run(["css", "--tokens", str(tokens)])
            self.assertEqual(code, 1)
            self.assertIn("Error:", err)

    def test_check_ok_and_failing(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            root = Path(td)
            (root / "post").mkdir()
            (root / "post" / "index.md").write_text(ARTICLE, encoding="utf-8")
            code, out, _ = _run(["check", "--content", str(root)])
            self.assertEqual(code, 0)
            self.assertIn("Documents: 1", out)

            (root / "bad.md").write_text("nope\n", encoding="utf-8")
            code, _, err = _run(["check", "--content", str(root)])
            self.assertEqual(code, 1)
            self.assertIn("bad.md", err)

    def test_manifest(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            root = Path(td)
            (root / "content" / "post").mkdir(parents=True)
            (root / "content" / "post" / "index.md").write_text(ARTICLE, encoding="utf-8")
            code, _, _ = _run(["manifest", "--content", str(root / "content"), "--out", str(root / "out")])
            self.assertEqual(code, 0)
            payload = json.loads((root / "out" / "content.json").read_text(encoding="utf-8"))
            self.assertEqual(payload["tags"], {"x": ["post"]})

    def test_specimen(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            code, out, _ = _run(["specimen", "--out", td])
            self.assertEqual(code, 0)
            self.assertTrue((Path(td) / "specimen.html").exists())

    def test_resolve(self) -> None:
        code, out, _ = _run(["resolve", "table > tbody > tr:1"])
        self.assertEqual(code, 0)
        self.assertIn("background-color", out)

        code, out, _ = _run(["resolve", "div.gatsby-highlight", "--width", "375"])
        self.assertEqual(code, 0)
        self.assertIn("-2rem", out)

        code, out, _ = _run(["resolve", "div > span"])
        self.assertEqual(code, 0)
        self.assertIn("no rules match", out)

        code, _, err = _run(["resolve", "tr:odd"])
        self.assertEqual(code, 1)
        self.assertIn("Error:", err)

    def test_tokens(self) -> None:
        code, out, _ = _run(["tokens"])
        self.assertEqual(code, 0)
        self.assertIn("breakpoint_phone", out)
        self.assertIn("672px", out)

    def test_tokens_with_overrides(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            tokens = Path(td) / "tokens.json"
            tokens.write_text(json.dumps({"breakpoint_phone": "800px"}), encoding="utf-8")
            code, out, _ = _run(["tokens", "--tokens", str(tokens)])
            self.assertEqual(code, 0)
            self.assertIn("800px", out)
            self.assertNotIn("672px", out)

            tokens.write_text(json.dumps({"no_such_token": "1px"}), encoding="utf-8")
            code, _, err = _run(["tokens", "--tokens", str(tokens)])
            self.assertEqual(code, 1)
            self.assertIn("Error:", err)


if __name__ == "__main__":
    unittest.main()
