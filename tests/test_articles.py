"""Tests for inkwell.services.articles: ownership, publish gate, slugs and public listings."""

import unittest

from sqlalchemy import select

from support import create_user, make_session_factory

from inkwell.core.errors import Forbidden, NotFound
from inkwell.models import ArticleStatus, Comment, CommentStatus
from inkwell.services.articles import ArticleService, escape_markup
from inkwell.services.rbac import RoleGraph
from inkwell.services.slugs import slugify
from inkwell.services.tags import TagService


class TestSlugify(unittest.TestCase):
    def test_accents_and_punctuation(self) -> None:
        self.assertEqual(slugify("Réglage de la suspension!"), "reglage-de-la-suspension")

    def test_empty_falls_back(self) -> None:
        self.assertEqual(slugify("???"), "untitled")

    def test_max_length(self) -> None:
        self.assertEqual(slugify("abc def ghi", max_length=7), "abc-def")


class TestEscapeMarkup(unittest.TestCase):
    def test_html_neutralized_markdown_kept(self) -> None:
        self.assertEqual(
            escape_markup("**bold** <script>alert(1)</script>"),
            "**bold** &lt;script&gt;alert(1)&lt;/script&gt;",
        )


class ArticleTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.db = make_session_factory()()
        self.articles = ArticleService(self.db, RoleGraph(self.db))
        self.contributor = create_user(
            self.db, "writer", "writer@example.com", roles=("Contributor",)
        )
        self.other_contributor = create_user(
            self.db, "writer2", "writer2@example.com", roles=("Contributor",)
        )
        self.editor = create_user(self.db, "ed", "ed@example.com", roles=("Editor",))

    def tearDown(self) -> None:
        self.db.close()


class TestPublishGate(ArticleTestCase):
    def test_contributor_creates_draft(self) -> None:
        article = self.articles.create(self.contributor, "First post", "Hello")
        self.assertEqual(article.status, ArticleStatus.DRAFT)
        self.assertEqual(article.author_name, "writer")

    def test_contributor_cannot_publish(self) -> None:
        with self.assertRaises(Forbidden):
            self.articles.create(
                self.contributor, "First post", "Hello", status=ArticleStatus.PUBLISHED
            )
        article = self.articles.create(self.contributor, "First post", "Hello")
        with self.assertRaises(Forbidden):
            self.articles.update(
                self.contributor, article.id, "First post", "Hello", ArticleStatus.ARCHIVED
            )

    def test_editor_can_publish(self) -> None:
        article = self.articles.create(
            self.editor, "News", "Body", status=ArticleStatus.PUBLISHED
        )
        self.assertEqual(article.status, ArticleStatus.PUBLISHED)


class TestOwnership(ArticleTestCase):
    def test_owner_can_edit(self) -> None:
        article = self.articles.create(self.contributor, "Mine", "Body")
        updated = self.articles.update(
            self.contributor, article.id, "Mine, revised", "New body", ArticleStatus.DRAFT
        )
        self.assertEqual(updated.title, "Mine, revised")
        self.assertEqual(updated.slug, "mine-revised")

    def test_other_contributor_cannot_edit(self) -> None:
        article = self.articles.create(self.contributor, "Mine", "Body")
        with self.assertRaises(Forbidden):
            self.articles.get_for_edit(self.other_contributor, article.id)

    def test_editor_can_edit_any(self) -> None:
        article = self.articles.create(self.contributor, "Mine", "Body")
        self.assertEqual(self.articles.get_for_edit(self.editor, article.id).id, article.id)

    def test_missing_article(self) -> None:
        with self.assertRaises(NotFound):
            self.articles.get(9999)


class TestArticleContent(ArticleTestCase):
    def test_slugs_are_unique(self) -> None:
        first = self.articles.create(self.contributor, "Hello World", "a")
        second = self.articles.create(self.contributor, "Hello World", "b")
        self.assertEqual(first.slug, "hello-world")
        self.assertEqual(second.slug, "hello-world-2")

    def test_body_is_sanitized(self) -> None:
        article = self.articles.create(self.contributor, "XSS", "<b>hi</b>")
        self.assertEqual(article.content, "&lt;b&gt;hi&lt;/b&gt;")

    def test_custom_sanitizer(self) -> None:
        service = ArticleService(self.db, RoleGraph(self.db), sanitize=str.upper)
        article = service.create(self.contributor, "Loud", "quiet words")
        self.assertEqual(article.content, "QUIET WORDS")

    def test_tags_replaced_as_set(self) -> None:
        tags = TagService(self.db)
        python = tags.create(self.editor, "Python")
        web = tags.create(self.editor, "Web")
        article = self.articles.create(self.contributor, "Tagged", "Body", tag_ids=[python.id])
        self.assertEqual([t.name for t in article.tags], ["Python"])
        article = self.articles.update(
            self.contributor, article.id, "Tagged", "Body", ArticleStatus.DRAFT, tag_ids=[web.id]
        )
        self.assertEqual([t.name for t in article.tags], ["Web"])

    def test_unknown_tag(self) -> None:
        with self.assertRaises(NotFound):
            self.articles.create(self.contributor, "Tagged", "Body", tag_ids=[9999])

    def test_delete_removes_comments(self) -> None:
        article = self.articles.create(
            self.editor, "Doomed", "Body", status=ArticleStatus.PUBLISHED
        )
        self.db.add(
            Comment(
                article_id=article.id,
                author_name="Reader",
                content="Nice",
                status=CommentStatus.APPROVED,
            )
        )
        self.db.commit()
        self.articles.delete(self.editor, article.id)
        self.assertEqual(list(self.db.scalars(select(Comment))), [])
        with self.assertRaises(NotFound):
            self.articles.get(article.id)


class TestPublicListing(ArticleTestCase):
    def test_only_published_listed_with_total(self) -> None:
        for i in range(3):
            self.articles.create(self.editor, f"Live {i}", "Body", status=ArticleStatus.PUBLISHED)
        self.articles.create(self.editor, "Hidden", "Body")
        self.articles.create(self.editor, "Old", "Body", status=ArticleStatus.ARCHIVED)

        page, total = self.articles.list_published(limit=2, offset=0)
        self.assertEqual(total, 3)
        self.assertEqual(len(page), 2)
        self.assertTrue(all(a.status == ArticleStatus.PUBLISHED for a in page))

        rest, _ = self.articles.list_published(limit=2, offset=2)
        self.assertEqual(len(rest), 1)

    def test_filter_by_tag(self) -> None:
        tag = TagService(self.db).create(self.editor, "Python")
        self.articles.create(
            self.editor, "Tagged", "Body", status=ArticleStatus.PUBLISHED, tag_ids=[tag.id]
        )
        self.articles.create(self.editor, "Untagged", "Body", status=ArticleStatus.PUBLISHED)
        self.articles.create(self.editor, "Tagged draft", "Body", tag_ids=[tag.id])
        page, total = self.articles.list_published(tag_slug="python")
        self.assertEqual(total, 1)
        self.assertEqual([a.title for a in page], ["Tagged"])


if __name__ == "__main__":
    unittest.main()
