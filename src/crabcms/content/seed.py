"""Seed content, default settings and default theme.

Everything here is built by factory functions so that each caller gets
fresh objects; nothing at module level is mutable state.

Bump ``SEED_VERSION`` whenever the stored schema changes.  Stores whose
version marker differs are wiped and reseeded on their next access.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

from crabcms.content.models import (
    Post,
    PostStatus,
    PostType,
    SiteSettings,
    ThemeColors,
    ThemeConfig,
    ThemeFonts,
)

SEED_VERSION = "2"

HOMEPAGE_ID = "home-page"

_HOME = """\
# The Future is Frontend.

> "Speed isn't just a feature. It's the foundation."

Crab CMS keeps the whole content layer next to the reader. There is no
server to maintain and every interaction is **instant**.

### Why Developers Choose Crab

- **Zero Latency**: Content lives with the client.
- **Universal Adapters**: Swap local storage for a static file or a database.
- **Theme Engine**: Live customization with CSS variables.
"""

_INCEPTION = """\
# The Fatigue of Complexity

A simple blog should not need a database server, a caching layer and a
deployment pipeline. We asked a simple question: **what if the client is
the database?**

Crab CMS was born from that question. It runs instantly, it is portable,
and when you do need a server it is one adapter away.

### The "No-Backend" Philosophy

By default Crab CMS runs in "Local Mode" and keeps everything in local
storage. When you are ready to scale you swap the adapter, not the
editing experience.
"""

_ARCHITECTURE = """\
# Architecture Deep Dive

## The Adapter Pattern

The core of Crab is the storage adapter contract. It decouples the
interface from the data layer: connect, list, fetch by id or slug, save,
delete, plus whole-record settings and theme access.

1. **Day 1**: develop against the local adapter.
2. **Day 7**: write a small adapter for the hosting choice.
3. **Day 8**: swap the adapter. **Done.**

Nothing else changes: the dashboard, the editor and the public pages all
talk to the same contract.
"""

_THEMING = """\
# The Power of CSS Variables

The theme is a small JSON document mapped straight onto CSS custom
properties:

```css
:root {
  --cms-primary: #f43f5e;
  --cms-bg: #020617;
  --cms-font-heading: 'Inter', sans-serif;
}
```

Changing a color updates one property on the document root, so live
previews stay smooth. Fonts are exposed the same way.
"""

_CONTACT = """\
# Contact Us

We'd love to hear from you.

Email: hello@crabcms.com
"""


def default_settings() -> SiteSettings:
    return SiteSettings(
        title="Crab CMS",
        description="A robust, frontend-first content management system.",
        footer_text="© 2024 Crab CMS. All rights reserved.",
        homepage_id=HOMEPAGE_ID,
    )


def default_theme() -> ThemeConfig:
    return ThemeConfig(
        id="default-dark",
        name="Crab Dark",
        colors=ThemeColors(
            background="#020617",
            text="#f1f5f9",
            primary="#f43f5e",
            secondary="#64748b",
        ),
        fonts=ThemeFonts(heading="Inter", body="Inter"),
    )


def seed_posts(now: datetime | None = None) -> list[Post]:
    """Return the fixed seed content set, stamped relative to *now*."""
    now = now or datetime.now(tz=UTC)
    two_days_ago = now - timedelta(days=2)
    one_day_ago = now - timedelta(days=1)

    def _item(
        id: str,
        title: str,
        slug: str,
        content: str,
        *,
        post_type: PostType,
        stamp: datetime,
        excerpt: str = "",
        tags: list[str] | None = None,
        cover_image: str | None = None,
    ) -> Post:
        return Post(
            id=id,
            title=title,
            slug=slug,
            excerpt=excerpt,
            content=content,
            status=PostStatus.PUBLISHED,
            post_type=post_type,
            created_at=stamp,
            updated_at=stamp,
            tags=tags or [],
            cover_image=cover_image,
        )

    return [
        _item(
            HOMEPAGE_ID,
            "Home",
            "home",
            _HOME,
            post_type=PostType.PAGE,
            stamp=now,
            excerpt="Welcome to our site.",
        ),
        _item(
            "post-inception",
            "Inception: Why We Built Crab CMS",
            "why-we-built-crab-cms",
            _INCEPTION,
            post_type=PostType.POST,
            stamp=two_days_ago,
            excerpt="The story behind the fastest frontend-first CMS.",
            tags=["Philosophy", "Engineering", "Story"],
            cover_image="https://images.unsplash.com/photo-1519389950473-47ba0277781c?auto=format&fit=crop&w=2100&q=80",
        ),
        _item(
            "post-architecture",
            "Under the Hood: The Architecture of Crab",
            "architecture-of-crab",
            _ARCHITECTURE,
            post_type=PostType.POST,
            stamp=one_day_ago,
            excerpt="How Crab CMS manages state, storage, and the adapter pattern.",
            tags=["Deep Dive", "Python", "Storage"],
            cover_image="https://images.unsplash.com/photo-1550751827-4bd374c3f58b?auto=format&fit=crop&w=2100&q=80",
        ),
        _item(
            "post-theming",
            "Designing the Theme Engine",
            "designing-theme-engine",
            _THEMING,
            post_type=PostType.POST,
            stamp=now,
            excerpt="A real-time theme editor built on CSS variables.",
            tags=["Design", "CSS", "UI/UX"],
            cover_image="https://images.unsplash.com/photo-1618005182384-a83a8bd57fbe?auto=format&fit=crop&w=2100&q=80",
        ),
        _item(
            "3",
            "Contact Us",
            "contact",
            _CONTACT,
            post_type=PostType.PAGE,
            stamp=now,
        ),
    ]


def seed_ids() -> list[str]:
    return [p.id for p in seed_posts()]
