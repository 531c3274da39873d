"""WCAG 2.1 colour-contrast maths for colours read from the browser."""

from __future__ import annotations

import re

from src.config import MIN_CONTRAST_LARGE, MIN_CONTRAST_NORMAL

WHITE = (255.0, 255.0, 255.0, 1.0)

_RGB = re.compile(r"rgba?\(\s*([\d.]+)[,\s]+([\d.]+)[,\s]+([\d.]+)(?:[,\s/]+([\d.]+%?))?\s*\)")


def parse_css_color(value: str) -> tuple[float, float, float, float]:
    """Parse the computed-style forms: rgb(), rgba(), #rgb, #rrggbb, 'transparent'."""
    value = (value or "").strip().lower()
    if value in ("", "transparent"):
        return (0.0, 0.0, 0.0, 0.0)

    m = _RGB.match(value)
    if m:
        r, g, b = (float(m.group(i)) for i in (1, 2, 3))
        alpha = m.group(4)
        if alpha is None:
            a = 1.0
        elif alpha.endswith("%"):
            a = float(alpha[:-1]) / 100
        else:
            a = float(alpha)
        return (r, g, b, a)

    if value.startswith("#"):
        hexpart = value[1:]
        if len(hexpart) == 3:
            hexpart = "".join(c * 2 for c in hexpart)
        if len(hexpart) == 6:
            return (
                float(int(hexpart[0:2], 16)),
                float(int(hexpart[2:4], 16)),
                float(int(hexpart[4:6], 16)),
                1.0,
            )

    raise ValueError(f"Unsupported CSS colour: {value!r}")


def blend(fg: tuple, bg: tuple) -> tuple[float, float, float, float]:
    """Composite a possibly translucent colour over an opaque one."""
    a = fg[3]
    return (
        fg[0] * a + bg[0] * (1 - a),
        fg[1] * a + bg[1] * (1 - a),
        fg[2] * a + bg[2] * (1 - a),
        1.0,
    )


def relative_luminance(color: tuple) -> float:
    def channel(c: float) -> float:
        c = c / 255
        return c / 12.92 if c <= 0.03928 else ((c + 0.055) / 1.055) ** 2.4

    r, g, b = (channel(c) for c in color[:3])
    return 0.2126 * r + 0.7152 * g + 0.0722 * b


def contrast_ratio(fg: tuple, bg: tuple) -> float:
    l1 = relative_luminance(fg)
    l2 = relative_luminance(bg)
    lighter, darker = max(l1, l2), min(l1, l2)
    return (lighter + 0.05) / (darker + 0.05)


def is_large_text(font_size_px: float, font_weight: int) -> bool:
    """WCAG large text: 18pt (24px), or 14pt (~18.66px) bold."""
    return font_size_px >= 24 or (font_size_px >= 18.66 and font_weight >= 700)


def check_color_contrast(samples: list[dict]) -> dict:
    """Evaluate text samples collected in the browser.

    Each sample: {text, color, background, fontSize, fontWeight}.
    """
    failures = []
    for sample in samples:
        bg = blend(parse_css_color(sample.get("background", "")), WHITE)
        fg = blend(parse_css_color(sample.get("color", "")), bg)
        ratio = contrast_ratio(fg, bg)
        large = is_large_text(float(sample.get("fontSize") or 16), int(sample.get("fontWeight") or 400))
        required = MIN_CONTRAST_LARGE if large else MIN_CONTRAST_NORMAL
        if ratio < required:
            failures.append({
                "text": sample.get("text", ""),
                "ratio": round(ratio, 2),
                "required": required,
                "color": sample.get("color"),
                "background": sample.get("background"),
            })
    return {"checked": len(samples), "failures": failures, "pass": not failures}
