"""Content domain — posts, pages, site settings and theme models.

Also provides the seed set written into fresh stores and the helpers
that turn a theme into CSS custom properties.
"""

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
from crabcms.content.seed import (
    SEED_VERSION,
    default_settings,
    default_theme,
    seed_posts,
)

__all__ = [
    "Post",
    "PostStatus",
    "PostType",
    "SEED_VERSION",
    "SiteSettings",
    "ThemeColors",
    "ThemeConfig",
    "ThemeFonts",
    "default_settings",
    "default_theme",
    "seed_posts",
    "slugify",
]
