"""Site verification: page checks, artifact checks, grading, and reporting."""

from src.validation.checks import validate_page
from src.validation.report import format_page_report, format_site_report
from src.validation.site import validate_site

__all__ = ["validate_page", "validate_site", "format_page_report", "format_site_report"]
