"""
Entry labels: convert an ordinal to a numeral string and prefix an outline tree.

    apply_numbering(items, config.levels)  ->  "1 Intro", "2 Body", "2.1 Detail"

Inherited labels chain the raw ordinals of the ancestors with the level's
separator; the numeral style only applies to the item's own segment.
"""

from typing import Sequence

from toc_maker.models import LevelStyle, NumeralStyle, OutlineItem, level_style_at

ROMAN_TABLE = [
    (1000, "M"),
    (900, "CM"),
    (500, "D"),
    (400, "CD"),
    (100, "C"),
    (90, "XC"),
    (50, "L"),
    (40, "XL"),
    (10, "X"),
    (9, "IX"),
    (5, "V"),
    (4, "IV"),
    (1, "I"),
]

CHINESE_DIGITS = ["零", "一", "二", "三", "四", "五", "六", "七", "八", "九", "十"]


def _to_roman(n: int) -> str:
    if n < 1:
        raise ValueError(f"Roman numerals need a positive ordinal, got {n}")
    out = []
    for value, symbol in ROMAN_TABLE:
        while n >= value:
            out.append(symbol)
            n -= value
    return "".join(out)


def _to_alpha(n: int) -> str:
    """Bijective base-26: 1 -> A, 26 -> Z, 27 -> AA, 52 -> AZ, 53 -> BA."""
    if n < 1:
        raise ValueError(f"Alphabetic labels need a positive ordinal, got {n}")
    letters = []
    while n > 0:
        n, rem = divmod(n - 1, 26)
        letters.append(chr(ord("A") + rem))
    return "".join(reversed(letters))


def generate_label(ordinal: int, style: NumeralStyle | str) -> str:
    """Render one ordinal in the given numeral style."""
    style = NumeralStyle(style)
    if style is NumeralStyle.UPPER_ALPHA:
        return _to_alpha(ordinal)
    if style is NumeralStyle.UPPER_ROMAN:
        return _to_roman(ordinal)
    if style is NumeralStyle.SIMPLIFIED_CHINESE:
        if 0 <= ordinal < len(CHINESE_DIGITS):
            return CHINESE_DIGITS[ordinal]
        return str(ordinal)
    return str(ordinal)


def apply_numbering(
    items: Sequence[OutlineItem],
    styles: Sequence[LevelStyle],
    parent_path: tuple[int, ...] = (),
    depth: int = 0,
) -> list[OutlineItem]:
    """
    Return copies of items (recursively) with display_prefix filled in.

    The input tree is left untouched; titles are never rewritten, the
    rendered form is OutlineItem.rendered_title.
    """
    if not styles:
        raise ValueError("At least one level style is required")
    style = level_style_at(styles, depth)
    numbered = []
    for index, item in enumerate(items, start=1):
        core = generate_label(index, style.style)
        if style.inherit_parent and parent_path:
            parent = style.separator.join(str(n) for n in parent_path)
            core = f"{parent}{style.separator}{core}"
        children = apply_numbering(item.children, styles, parent_path + (index,), depth + 1)
        numbered.append(
            item.model_copy(
                update={
                    "display_prefix": f"{style.prefix}{core}{style.suffix}",
                    "children": children,
                }
            )
        )
    return numbered
