"""Static directory of trusted Dartford plumbers, plus build verification.

Package structure:
    src/config.py           – paths, site identity, routes, verification thresholds
    src/models.py           – PlumberRecord, HomepageCopy, SiteData
    src/loaders/            – JSON data loading, validation, slug derivation
    src/site/               – page templates, structured data, sitemaps, build
    src/validation/         – page and artifact checks, live HTTP check, reports
    src/selenium_ops/       – headless Chrome audit (mobile layout, contrast)
"""
