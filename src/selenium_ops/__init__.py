"""Selenium automation: mobile-viewport audit of a served build."""

from src.selenium_ops.browser_audit import BrowserAudit, audit_site
from src.selenium_ops.server import serve_directory

__all__ = ["BrowserAudit", "audit_site", "serve_directory"]
