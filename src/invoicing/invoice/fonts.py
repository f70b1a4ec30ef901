"""Font registration for invoice rendering.

Customer names, addresses and the currency suffix are Cyrillic, which the
PDF base-14 fonts cannot show, so the renderer embeds Noto Sans when the
font files are available. When they are not, the built-in Helvetica pair
is used and the document is still produced.
"""

from dataclasses import dataclass
from pathlib import Path

import structlog
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont

logger = structlog.get_logger(__name__)

EMBEDDED_REGULAR = "Body"
EMBEDDED_BOLD = "BodyBold"
FALLBACK_REGULAR = "Helvetica"
FALLBACK_BOLD = "Helvetica-Bold"

_FONT_FILES = {
    EMBEDDED_REGULAR: "NotoSans-Regular.ttf",
    EMBEDDED_BOLD: "NotoSans-Bold.ttf",
}


@dataclass(frozen=True)
class FontSet:
    regular: str
    bold: str
    embedded: bool


FALLBACK_FONTS = FontSet(regular=FALLBACK_REGULAR, bold=FALLBACK_BOLD, embedded=False)


# (base name, font file) -> name the file is registered under
_registered: dict[tuple[str, Path], str] = {}


def _font_name(base: str) -> str:
    taken = set(pdfmetrics.getRegisteredFontNames())
    if base not in taken:
        return base
    suffix = 2
    while f"{base}-{suffix}" in taken:
        suffix += 1
    return f"{base}-{suffix}"


def _register(base: str, path: Path) -> str | None:
    """Register the TrueType file at ``path``; return its font name, or None if unusable.

    reportlab font names are process-wide and cannot be re-pointed, so each
    distinct file gets its own name and a file is only ever loaded once.
    """
    if not path.is_file():
        return None

    key = (base, path.resolve())
    if key in _registered:
        return _registered[key]

    name = _font_name(base)
    try:
        pdfmetrics.registerFont(TTFont(name, str(path)))
    except Exception as exc:
        logger.warning("Font file could not be registered", font=name, path=str(path), error=str(exc))
        return None

    _registered[key] = name
    return name


def register_fonts(fonts_dir: Path | str | None) -> FontSet:
    """Register the embedded fonts from ``fonts_dir`` or fall back to Helvetica.

    Never raises: an unusable directory or font file only downgrades the
    font set.
    """
    if fonts_dir is None:
        return FALLBACK_FONTS

    fonts_dir = Path(fonts_dir)
    regular = _register(EMBEDDED_REGULAR, fonts_dir / _FONT_FILES[EMBEDDED_REGULAR])
    bold = _register(EMBEDDED_BOLD, fonts_dir / _FONT_FILES[EMBEDDED_BOLD])
    if regular is None or bold is None:
        logger.warning(
            "Invoice fonts not found, falling back to Helvetica",
            fonts_dir=str(fonts_dir),
        )
        return FALLBACK_FONTS

    return FontSet(regular=regular, bold=bold, embedded=True)
