"""Tests for inkwell.services.tags: unique names, slugs, counts and detachment on delete."""

import unittest

from support import create_user, make_session_factory

from inkwell.core.errors import DuplicateTag, NotFound
from inkwell.models import ArticleStatus
from inkwell.services.articles import ArticleService
from inkwell.services.rbac import RoleGraph
from inkwell.services.tags import TagService


class TestTagService(unittest.TestCase):
    def setUp(self) -> None:
        self.db = make_session_factory()()
        self.editor = create_user(self.db, "ed", "ed@example.com", roles=("Editor",))
        self.tags = TagService(self.db)
        self.articles = ArticleService(self.db, RoleGraph(self.db))

    def tearDown(self) -> None:
        self.db.close()

    def test_create_derives_slug(self) -> None:
        tag = self.tags.create(self.editor, "Machine Learning")
        self.assertEqual(tag.slug, "machine-learning")
        self.assertEqual(self.tags.get_by_slug("machine-learning").id, tag.id)

    def test_names_unique_case_insensitively(self) -> None:
        self.tags.create(self.editor, "Python")
        with self.assertRaises(DuplicateTag) as ctx:
            self.tags.create(self.editor, "python")
        self.assertEqual(ctx.exception.field, "name")

    def test_rename_updates_slug(self) -> None:
        tag = self.tags.create(self.editor, "Pyhton")
        tag = self.tags.update(self.editor, tag.id, "Python")
        self.assertEqual(tag.slug, "python")
        with self.assertRaises(NotFound):
            self.tags.get_by_slug("pyhton")

    def test_counts_only_published(self) -> None:
        python = self.tags.create(self.editor, "Python")
        self.tags.create(self.editor, "Empty")
        self.articles.create(
            self.editor, "Live", "Body", status=ArticleStatus.PUBLISHED, tag_ids=[python.id]
        )
        self.articles.create(self.editor, "Draft", "Body", tag_ids=[python.id])
        counts = {tag.name: n for tag, n in self.tags.list_with_counts()}
        self.assertEqual(counts, {"Empty": 0, "Python": 1})

    def test_delete_detaches_from_articles(self) -> None:
        tag = self.tags.create(self.editor, "Python")
        article = self.articles.create(self.editor, "Live", "Body", tag_ids=[tag.id])
        self.tags.delete(self.editor, tag.id)
        self.db.expire_all()
        self.assertEqual(self.articles.get(article.id).tags, [])
        with self.assertRaises(NotFound):
            self.tags.get(tag.id)


if __name__ == "__main__":
    unittest.main()
