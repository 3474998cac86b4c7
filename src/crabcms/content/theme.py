"""Map a ThemeConfig onto the CSS custom properties the site reads."""

from __future__ import annotations

from crabcms.content.models import ThemeColors, ThemeConfig

COLOR_VARIABLES: dict[str, str] = {
    "background": "--cms-bg",
    "text": "--cms-text",
    "primary": "--cms-primary",
    "secondary": "--cms-secondary",
}

FONT_VARIABLES: dict[str, str] = {
    "heading": "--cms-font-heading",
    "body": "--cms-font-body",
}


def css_variables(theme: ThemeConfig) -> dict[str, str]:
    """Return ``{css-variable: value}`` for every color and font."""
    variables = {var: getattr(theme.colors, key) for key, var in COLOR_VARIABLES.items()}
    variables.update({var: getattr(theme.fonts, key) for key, var in FONT_VARIABLES.items()})
    return variables


def render_root_css(theme: ThemeConfig) -> str:
    lines = [":root {"]
    for name, value in css_variables(theme).items():
        lines.append(f"  {name}: {value};")
    lines.append("}")
    return "\n".join(lines)


def with_color(theme: ThemeConfig, key: str, value: str) -> ThemeConfig:
    """Return a copy of *theme* with one palette entry replaced.

    Raises:
        ValueError: If *key* is not a palette entry.
    """
    if key not in ThemeColors.model_fields:
        raise ValueError(f"Unknown theme color: {key!r}")
    colors = theme.colors.model_copy(update={key: value})
    return theme.model_copy(update={"colors": colors})
