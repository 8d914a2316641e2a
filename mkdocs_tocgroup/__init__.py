"""
mkdocs-tocgroup — grouped API navigation for MkDocs.

Reads a TypeDoc project export, groups documented symbols by their
``@group`` / ``@kind`` / ``@platform`` comment tags, and rewrites each
page's table of contents so that its top level lists those groups.
"""

__version__ = "1.0.0"
