"""Stylesheet loader chains for plugkit.

Every stylesheet goes through the same chain, from extraction to a
separate CSS file down to Sass compilation. Loaders run last to first,
so compilation happens first at build time.

The PatternFly stylesheet is special. It references fake icon and font
paths that do not exist in a plugin's deployed layout, so its chain gets
an extra string-replace sub-stage between decoding and compilation that
points the icon font at the copy shipped by the host and drops the
unwanted font-face blocks.
"""

from __future__ import annotations

from plugkit_core.schemas.pipeline import LoaderSpec, Pattern

# Stylesheet that needs the icon/font patch sub-stage
SPECIAL_STYLESHEET = "patternfly-4-cockpit.scss"

EXTRACT_LOADER = "mini-css-extract-plugin/loader"
CSS_LOADER = "css-loader"
PATCH_LOADER = "string-replace-loader"
SASS_LOADER = "sass-loader"

# (search, replacement) pairs applied to the whole sheet
ICON_FONT_REWRITE = (
    Pattern(source=r'src:url\("patternfly-icons-fake-path\/pficon[^}]*', flags="g"),
    'src:url("../base1/fonts/patternfly.woff") format("woff");',
)
FAKE_FONT_FACE_REMOVAL = (
    Pattern(source=r"@font-face[^}]*patternfly-fonts-fake-path[^}]*}", flags="g"),
    "",
)
PATCH_REWRITES: tuple[tuple[Pattern, str], ...] = (ICON_FONT_REWRITE, FAKE_FONT_FACE_REMOVAL)


def extract_loader() -> LoaderSpec:
    return LoaderSpec(loader=EXTRACT_LOADER)


def css_loader() -> LoaderSpec:
    # url() references resolve at runtime against the deployed layout
    return LoaderSpec(loader=CSS_LOADER, options={"sourceMap": True, "url": False})


def patch_loader() -> LoaderSpec:
    """String-replace sub-stage carrying the fixed icon/font rewrites."""
    return LoaderSpec(
        loader=PATCH_LOADER,
        options={
            "multiple": [
                {
                    "search": pattern.model_dump(),
                    "replace": replacement,
                }
                for pattern, replacement in PATCH_REWRITES
            ],
        },
    )


def sass_loader() -> LoaderSpec:
    return LoaderSpec(
        loader=SASS_LOADER,
        options={
            "sourceMap": True,
            "sassOptions": {"outputStyle": "compressed"},
        },
    )


def build_chain(is_special_sheet: bool) -> list[LoaderSpec]:
    """Build the loader chain for a stylesheet.

    Args:
        is_special_sheet: True for SPECIAL_STYLESHEET.

    Returns:
        Ordered loaders: extraction, decoding, the patch sub-stage for the
        special sheet only, and Sass compilation last.
    """
    chain = [extract_loader(), css_loader()]
    if is_special_sheet:
        chain.append(patch_loader())
    chain.append(sass_loader())
    return chain


def apply_patches(text: str) -> str:
    """Apply the patch sub-stage rewrites to stylesheet text.

    Both rewrites are global and independent of each other.

    Example:
        >>> apply_patches('a{src:url("patternfly-icons-fake-path/pficon.woff")}')
        'a{src:url("../base1/fonts/patternfly.woff") format("woff");}'
    """
    for pattern, replacement in PATCH_REWRITES:
        text = pattern.sub(replacement, text)
    return text
