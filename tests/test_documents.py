"""Tests for document loading, checks, tag index and the content manifest."""

from __future__ import annotations

import json
import tempfile
import unittest
from datetime import UTC, date, datetime
from pathlib import Path

from folio.content.documents import (
    check_documents,
    document_slug,
    load_document,
    load_documents,
    slugify,
    tag_index,
)
from folio.content.frontmatter import FrontMatterError
from folio.content.manifest import create_manifest, write_manifest

REPO_CONTENT = Path(__file__).resolve().parents[1] / "content"


def _article(title: str, day: str, tags: str = "[]", body: str = "Body.\n") -> str:
    return f"---\ntitle: {title}\ndate: {day}\ndescription: About {title}\ntags: {tags}\n---\n\n{body}"


def _write(root: Path, rel: str, text: str) -> Path:
    path = root / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


class TestSlugs(unittest.TestCase):
    def test_slugify(self) -> None:
        self.assertEqual(slugify("Hello, World!"), "hello-world")
        self.assertEqual(slugify("i18n & l10n_notes"), "i18n-and-l10n-notes")
        self.assertLessEqual(len(slugify("word " * 40, max_len=20)), 20)

    def test_document_slug(self) -> None:
        self.assertEqual(document_slug(Path("blog/hello-world/index.md")), "hello-world")
        self.assertEqual(document_slug(Path("blog/Some Notes.md")), "some-notes")


class TestLoadDocuments(unittest.TestCase):
    def test_loads_newest_first(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            root = Path(td)
            _write(root, "blog/old/index.md", _article("Old", "2019-01-01"))
            _write(root, "blog/new/index.md", _article("New", "2020-01-01"))
            _write(root, "blog/b-same/index.md", _article("B", "2019-06-01"))
            _write(root, "blog/a-same/index.md", _article("A", "2019-06-01"))
            docs = load_documents(root)
            self.assertEqual([d.slug for d in docs], ["new", "a-same", "b-same", "old"])
            self.assertEqual(docs[0].path, "blog/new/index.md")
            self.assertEqual(len(docs[0].sha256), 64)

    def test_invalid_document_names_path(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            path = _write(Path(td), "bad.md", "---\ntitle: T\n---\n")
            with self.assertRaises(FrontMatterError) as ctx:
                load_document(path)
            self.assertIn("bad.md", str(ctx.exception))

    def test_missing_root_loads_nothing(self) -> None:
        self.assertEqual(load_documents(Path("/nonexistent/folio-content")), [])


class TestCheckDocuments(unittest.TestCase):
    def test_collects_problems(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            root = Path(td)
            _write(root, "blog/ok/index.md", _article("Ok", "2020-01-01"))
            _write(root, "blog/broken/index.md", "no front matter\n")
            _write(root, "blog/empty/index.md", _article("Empty", "2020-01-02", body=""))
            _write(root, "drafts/ok.md", _article("Ok again", "2020-01-03"))
            docs, problems = check_documents(root)

            self.assertEqual(len(docs), 3)
            self.assertEqual(len(problems), 3)
            self.assertTrue(any("broken" in p for p in problems))
            self.assertTrue(any("empty body" in p for p in problems))
            self.assertTrue(any("duplicate slug 'ok'" in p for p in problems))

    def test_empty_directory_is_a_problem(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            docs, problems = check_documents(Path(td))
            self.assertEqual(docs, [])
            self.assertEqual(len(problems), 1)


class TestTagIndex(unittest.TestCase):
    def test_groups_slugs_by_tag(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            root = Path(td)
            _write(root, "a/index.md", _article("A", "2020-01-01", "[react, i18n]"))
            _write(root, "b/index.md", _article("B", "2020-01-02", "[react]"))
            index = tag_index(load_documents(root))
            self.assertEqual(index, {"i18n": ["a"], "react": ["a", "b"]})
            self.assertEqual(list(index), sorted(index))


class TestManifest(unittest.TestCase):
    def _docs(self, root: Path):
        _write(root, "blog/one/index.md", _article("One", "2020-01-01", "[b, a]"))
        _write(root, "blog/two/index.md", _article("Two", "2021-07-04", "[a]"))
        return load_documents(root)

    def test_stable_timestamp_from_newest_document(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            manifest = create_manifest(self._docs(Path(td)), stylesheet="p { }")
            self.assertEqual(manifest.generated_at, datetime(2021, 7, 4, tzinfo=UTC))
            self.assertEqual([d.slug for d in manifest.documents], ["two", "one"])
            self.assertEqual(manifest.documents[1].tags, ["a", "b"])
            self.assertEqual(manifest.tags, {"a": ["one", "two"], "b": ["one"]})
            self.assertEqual(len(manifest.stylesheet_sha256 or ""), 64)

    def test_write_manifest_is_byte_stable(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            root = Path(td)
            docs = self._docs(root / "content")
            p1 = write_manifest(create_manifest(docs), root / "out1")
            p2 = write_manifest(create_manifest(list(reversed(docs))), root / "out2")
            self.assertEqual(p1.read_bytes(), p2.read_bytes())
            payload = json.loads(p1.read_text(encoding="utf-8"))
            self.assertEqual(payload["schema_version"], 1)
            self.assertEqual(payload["documents"][0]["date"], "2021-07-04")
            self.assertIsNone(payload["stylesheet_sha256"])

    def test_empty_manifest(self) -> None:
        manifest = create_manifest([])
        self.assertEqual(manifest.documents, [])
        self.assertEqual(manifest.generated_at, datetime(1970, 1, 1, tzinfo=UTC))


class TestRepositoryContent(unittest.TestCase):
    def test_every_article_has_valid_front_matter(self) -> None:
        docs, problems = check_documents(REPO_CONTENT)
        self.assertEqual(problems, [])
        self.assertGreaterEqual(len(docs), 1)
        for doc in docs:
            with self.subTest(slug=doc.slug):
                fm = doc.front_matter
                self.assertIsInstance(fm.title, str)
                self.assertTrue(fm.title)
                self.assertIsInstance(fm.date, date)
                self.assertIsInstance(fm.description, str)
                self.assertIsInstance(fm.tags, frozenset)
                self.assertTrue(all(isinstance(t, str) and t for t in fm.tags))

    def test_i18n_essay_is_published(self) -> None:
        slugs = {d.slug for d in load_documents(REPO_CONTENT)}
        self.assertIn("i18n-patterns-in-react", slugs)


if __name__ == "__main__":
    unittest.main()
