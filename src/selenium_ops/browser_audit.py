"""Headless-browser audit: mobile layout, tap targets, focus, colour contrast.

Runs against a served copy of the site (see server.serve_directory) in a
single Chrome session emulating a phone viewport.
"""

from __future__ import annotations

from src.config import (
    CALL_BUTTON_MIN_HEIGHT_PX,
    CHROME_HEADLESS,
    MOBILE_VIEWPORT,
    OVERFLOW_TOLERANCE_PX,
    TAP_TARGET_MIN_PX,
    TAP_TARGET_PASS_PCT,
    TAP_TARGET_SAMPLE,
)
from src.selenium_ops.contrast import check_color_contrast

OVERFLOW_JS = "return [document.body.scrollWidth, window.innerWidth];"

RECT_JS = """
const el = document.querySelector(arguments[0]);
if (!el) return null;
const r = el.getBoundingClientRect();
return {x: r.x, y: r.y, width: r.width, height: r.height};
"""

RECTS_JS = """
return Array.from(document.querySelectorAll(arguments[0])).slice(0, arguments[1]).map(el => {
  const r = el.getBoundingClientRect();
  return {text: (el.textContent || '').trim().slice(0, 30), x: r.x, y: r.y, width: r.width, height: r.height};
});
"""

FOCUS_JS = """
const el = document.querySelector(arguments[0]);
if (!el) return null;
el.focus();
return document.activeElement ? document.activeElement.tagName : null;
"""

TEXT_COLORS_JS = """
const out = [];
const seen = new Set();
const walker = document.createTreeWalker(document.body, NodeFilter.SHOW_TEXT);
while (walker.nextNode()) {
  const node = walker.currentNode;
  const el = node.parentElement;
  if (!el || seen.has(el) || !node.textContent.trim()) continue;
  seen.add(el);
  if (['SCRIPT', 'STYLE', 'NOSCRIPT'].includes(el.tagName)) continue;
  const style = getComputedStyle(el);
  const rect = el.getBoundingClientRect();
  if (style.display === 'none' || style.visibility === 'hidden' || rect.width < 2 || rect.height < 2) continue;
  let bg = null;
  for (let p = el; p; p = p.parentElement) {
    const c = getComputedStyle(p).backgroundColor;
    if (c && c !== 'transparent' && c !== 'rgba(0, 0, 0, 0)') { bg = c; break; }
  }
  out.push({
    text: node.textContent.trim().slice(0, 40),
    color: style.color,
    background: bg || 'rgb(255, 255, 255)',
    fontSize: parseFloat(style.fontSize),
    fontWeight: parseInt(style.fontWeight, 10) || 400,
  });
}
return out;
"""


class BrowserAudit:
    """One Chrome session; each check loads a URL and measures the rendered page."""

    def __init__(self, headless: bool = CHROME_HEADLESS, viewport: tuple[int, int] = MOBILE_VIEWPORT, driver=None):
        self.driver = driver
        self.headless = headless
        self.viewport = viewport

    # ── Browser lifecycle ─────────────────────────────────────────────

    def start(self):
        """Launch Chrome and switch it to a mobile viewport."""
        if self.driver is not None:
            return

        from selenium import webdriver
        from selenium.webdriver.chrome.service import Service
        from selenium.webdriver.chrome.options import Options

        try:
            from webdriver_manager.chrome import ChromeDriverManager
            service = Service(ChromeDriverManager().install())
        except Exception:
            service = Service()

        width, height = self.viewport
        options = Options()
        if self.headless:
            options.add_argument("--headless=new")
        options.add_argument(f"--window-size={width},{height}")
        options.add_argument("--no-sandbox")
        options.add_argument("--disable-dev-shm-usage")

        self.driver = webdriver.Chrome(service=service, options=options)
        self.driver.execute_cdp_cmd("Emulation.setDeviceMetricsOverride", {
            "width": width,
            "height": height,
            "deviceScaleFactor": 2,
            "mobile": True,
        })

    @property
    def is_alive(self) -> bool:
        """Check if the browser session is still usable."""
        if not self.driver:
            return False
        try:
            _ = self.driver.current_url
            return True
        except Exception:
            return False

    def close(self):
        if self.driver:
            try:
                self.driver.quit()
            except Exception:
                pass
            self.driver = None

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, *exc):
        self.close()

    # ── Page helpers ──────────────────────────────────────────────────

    def open(self, url: str):
        if not self.is_alive:
            raise RuntimeError("Browser session is closed. Call start() first.")
        self.driver.get(url)

    def _script(self, script: str, *args):
        return self.driver.execute_script(script, *args)

    # ── Checks (the page must already be open) ────────────────────────

    def check_horizontal_overflow(self) -> dict:
        scroll_width, viewport_width = self._script(OVERFLOW_JS)
        return {
            "scroll_width": scroll_width,
            "viewport_width": viewport_width,
            "pass": scroll_width <= viewport_width + OVERFLOW_TOLERANCE_PX,
        }

    def check_tap_targets(self) -> dict:
        """At least TAP_TARGET_PASS_PCT% of the first links/buttons are 44x44 or larger.

        Elements with no rendered box (hidden, screen-reader only) are not counted.
        """
        rects = self._script(RECTS_JS, "a, button", TAP_TARGET_SAMPLE) or []
        measured = [r for r in rects if r["width"] > 1 and r["height"] > 1]
        small = [
            r for r in measured
            if r["width"] < TAP_TARGET_MIN_PX or r["height"] < TAP_TARGET_MIN_PX
        ]
        pct = 100.0 if not measured else (len(measured) - len(small)) / len(measured) * 100
        return {
            "measured": len(measured),
            "too_small": small,
            "pct_meeting_target": round(pct, 1),
            "pass": pct > TAP_TARGET_PASS_PCT,
        }

    def check_call_button(self, min_width: float = 0, min_height: float = CALL_BUTTON_MIN_HEIGHT_PX) -> dict:
        rect = self._script(RECT_JS, 'a[href^="tel:"]')
        if rect is None:
            return {"found": False, "pass": False}
        return {
            "found": True,
            "width": rect["width"],
            "height": rect["height"],
            "pass": rect["width"] >= min_width and rect["height"] >= min_height,
        }

    def check_tel_focusable(self) -> dict:
        tag = self._script(FOCUS_JS, 'a[href^="tel:"]')
        return {"active_element": tag, "pass": tag == "A"}

    def check_cards_stacked(self) -> dict:
        rects = self._script(RECTS_JS, "#plumbers article", 2) or []
        if len(rects) < 2:
            return {"cards": len(rects), "pass": False}
        first, second = rects
        return {
            "cards": len(rects),
            "first_bottom": first["y"] + first["height"],
            "second_top": second["y"],
            "pass": second["y"] > first["y"] + first["height"] - 10,
        }

    def check_hero_width(self, max_width: float = 400) -> dict:
        rect = self._script(RECT_JS, "h1")
        if rect is None:
            return {"found": False, "pass": False}
        return {"found": True, "width": rect["width"], "pass": rect["width"] < max_width}

    def check_breadcrumb_readable(self) -> dict:
        rect = self._script(RECT_JS, 'nav[aria-label="Breadcrumb"] a')
        if rect is None:
            return {"found": False, "pass": False}
        return {"found": True, "height": rect["height"], "pass": rect["height"] > 15}

    def check_contrast(self) -> dict:
        samples = self._script(TEXT_COLORS_JS) or []
        return check_color_contrast(samples)

    # ── Page audits ───────────────────────────────────────────────────

    def audit_homepage(self, url: str) -> dict:
        self.open(url)
        return {
            "no horizontal scroll": self.check_horizontal_overflow(),
            "hero fits viewport": self.check_hero_width(),
            "tap targets": self.check_tap_targets(),
            "call button size": self.check_call_button(),
            "tel link focusable": self.check_tel_focusable(),
            "cards stacked": self.check_cards_stacked(),
            "colour contrast": self.check_contrast(),
        }

    def audit_plumber_page(self, url: str) -> dict:
        self.open(url)
        return {
            "no horizontal scroll": self.check_horizontal_overflow(),
            "call button size": self.check_call_button(
                min_width=TAP_TARGET_MIN_PX, min_height=TAP_TARGET_MIN_PX
            ),
            "breadcrumb readable": self.check_breadcrumb_readable(),
            "colour contrast": self.check_contrast(),
        }


def audit_site(base_url: str, routes: list[str], audit: BrowserAudit | None = None) -> dict:
    """Audit the homepage and every detail route; returns checks keyed 'route: check'.

    A browser that fails to start, or a page whose audit raises, is recorded
    as a failing check so the rest of the report still gets produced.
    """
    base = base_url.rstrip("/")
    own = audit is None
    audit = audit or BrowserAudit()

    checks: dict[str, dict] = {}
    try:
        try:
            audit.start()
        except Exception as e:
            print(f"  Browser failed to start: {e}")
            checks["browser: start"] = {"error": f"{type(e).__name__}: {e}", "pass": False}
        else:
            print(f"  Browser audit at {audit.viewport[0]}x{audit.viewport[1]}...")
            for route in routes:
                try:
                    if route == "/":
                        page_checks = audit.audit_homepage(base + "/")
                    else:
                        page_checks = audit.audit_plumber_page(base + route)
                except Exception as e:
                    print(f"  Audit of {route} failed: {e}")
                    page_checks = {"page audit": {"error": f"{type(e).__name__}: {e}", "pass": False}}
                for name, result in page_checks.items():
                    checks[f"{route}: {name}"] = result
    finally:
        if own:
            audit.close()

    issues = [
        f"{name}: {result['error']}" if result.get("error") else name
        for name, result in checks.items()
        if not result["pass"]
    ]
    print(f"  → {len(checks) - len(issues)}/{len(checks)} browser checks passed")
    return {"checks": checks, "issues": issues, "warnings": [], "pass": not issues}
