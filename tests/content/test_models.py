"""Tests for content domain models."""

from datetime import UTC, datetime

import pytest
from crabcms.content.models import (
    Post,
    PostStatus,
    PostType,
    SiteSettings,
    ThemeColors,
    ThemeConfig,
    ThemeFonts,
    slugify,
)


class TestPostStatus:
    def test_enum_values(self):
        assert PostStatus.DRAFT == "draft"
        assert PostStatus.PUBLISHED == "published"

    def test_all_values(self):
        assert {s.value for s in PostStatus} == {"draft", "published"}


class TestPostType:
    def test_all_values(self):
        assert {t.value for t in PostType} == {"post", "page"}


class TestSlugify:
    @pytest.mark.parametrize(
        ("title", "expected"),
        [
            ("Hello, World!", "hello-world"),
            ("My First Post", "my-first-post"),
            ("  --Leading and trailing--  ", "leading-and-trailing"),
            ("C++ & Rust: 2024 edition", "c-rust-2024-edition"),
            ("already-a-slug", "already-a-slug"),
            ("!!!", ""),
        ],
    )
    def test_slugify(self, title: str, expected: str):
        assert slugify(title) == expected

    def test_non_ascii_collapses(self):
        assert slugify("Café Crème") == "caf-cr-me"


class TestPost:
    def test_minimal_creation(self):
        post = Post(title="My First Post")
        assert post.slug == "my-first-post"
        assert post.status == PostStatus.DRAFT
        assert post.post_type == PostType.POST
        assert post.author_id == "admin"
        assert post.tags == []
        assert post.created_at is None
        assert post.updated_at is None

    def test_generates_unique_ids(self):
        a = Post(title="A")
        b = Post(title="A")
        assert a.id
        assert a.id != b.id

    def test_explicit_slug_kept(self):
        post = Post(title="Hello, World!", slug="custom")
        assert post.slug == "custom"

    def test_missing_type_defaults_to_post(self):
        post = Post.model_validate({"id": "old", "title": "Legacy", "slug": "legacy"})
        assert post.post_type == PostType.POST

    def test_accepts_camel_case(self):
        post = Post.model_validate(
            {
                "id": "p1",
                "title": "Page",
                "type": "page",
                "authorId": "editor",
                "coverImage": "https://example.com/c.png",
                "createdAt": "2024-01-02T03:04:05+00:00",
            }
        )
        assert post.post_type == PostType.PAGE
        assert post.author_id == "editor"
        assert post.cover_image == "https://example.com/c.png"
        assert post.created_at == datetime(2024, 1, 2, 3, 4, 5, tzinfo=UTC)

    def test_dumps_camel_case(self):
        post = Post(id="p1", title="Page", post_type=PostType.PAGE, cover_image="x.png")
        data = post.to_json_dict()
        assert data["type"] == "page"
        assert data["coverImage"] == "x.png"
        assert data["authorId"] == "admin"
        assert "post_type" not in data

    def test_tags_keep_order_and_duplicates(self):
        post = Post(title="T", tags=["b", "a", "b"])
        assert post.tags == ["b", "a", "b"]

    def test_read_time(self):
        assert Post(title="T", content="").read_time_minutes == 1
        assert Post(title="T", content="word " * 200).read_time_minutes == 1
        assert Post(title="T", content="word " * 201).read_time_minutes == 2

    def test_is_published(self):
        assert Post(title="T", status=PostStatus.PUBLISHED).is_published is True
        assert Post(title="T").is_published is False

    def test_naive_timestamps_become_utc(self):
        post = Post.model_validate(
            {"title": "T", "createdAt": "2024-01-01T00:00:00", "updatedAt": "2024-01-02T00:00:00"}
        )
        assert post.created_at == datetime(2024, 1, 1, tzinfo=UTC)
        assert post.updated_at.tzinfo is UTC

    def test_aware_timestamps_kept(self):
        post = Post.model_validate({"title": "T", "createdAt": "2024-01-01T05:00:00+02:00"})
        assert post.created_at == datetime(2024, 1, 1, 3, tzinfo=UTC)
        assert post.created_at.utcoffset().total_seconds() == 7200


class TestSiteSettings:
    def test_defaults(self):
        settings = SiteSettings(title="Site")
        assert settings.homepage_id is None
        assert settings.logo_url is None

    def test_wire_names(self):
        settings = SiteSettings(title="Site", footer_text="f", homepage_id="home")
        data = settings.to_json_dict()
        assert data["footerText"] == "f"
        assert data["homepageId"] == "home"


class TestThemeConfig:
    def test_round_trip_through_json(self):
        theme = ThemeConfig(
            id="t",
            name="Theme",
            colors=ThemeColors(background="#000", text="#fff", primary="red", secondary="blue"),
            fonts=ThemeFonts(heading="Inter", body="Merriweather"),
        )
        assert ThemeConfig.model_validate(theme.to_json_dict()) == theme
