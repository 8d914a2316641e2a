"""
Tree regrouper: rewrites the top level of a page's navigation tree.

The default tree lists the symbols of the page's module; after regrouping
its top level lists one node per group key instead, each holding the
symbols tagged with that key, followed by an ``Others`` group for
everything untagged.
"""

from __future__ import annotations

import logging

from .models import NavigationItem
from .toc import default_toc, is_container

log = logging.getLogger("mkdocs.plugins.tocgroup")

DEFAULT_UNGROUPED_NAME = "Others"


def _ensure_ungrouped(index, items):
    # Computed once per build; later pages reuse the cached group.
    membership = index.group_membership
    if DEFAULT_UNGROUPED_NAME in membership:
        return
    ungrouped = [item.title for item in items if item.title not in index.grouped_names]
    if ungrouped:
        membership[DEFAULT_UNGROUPED_NAME] = ungrouped


def _mark_deprecated(item):
    if item.deprecated:
        return
    item.deprecated = True
    item.css_classes = f"{item.css_classes} deprecated".strip()


def _build_group(key, names, items, index):
    root = NavigationItem(key, index.home_path)
    root.group_title = key
    for item in items:
        ref = item.reflection
        if ref is not None and index.matcher.is_excluded_kind(ref.kind):
            continue
        if item.title in index.deprecated_names:
            _mark_deprecated(item)
        if item.title in names:
            item.parent = root
            root.children.append(item)
    # Groups sort by the kind of their first member.
    root.reflection = root.children[0].reflection if root.children else None
    return root


def regroup_toc(toc, index):
    """Replace the top-level children of ``toc`` with group nodes.

    ``toc`` is returned unchanged when there is no index or no group was
    recorded for this build.
    """
    if index is None:
        log.debug("tocgroup: no group index for this build, keeping default toc")
        return toc
    if not index.group_membership:
        return toc

    items = list(toc.children)
    _ensure_ungrouped(index, items)

    groups = [
        _build_group(key, names, items, index) for key, names in index.group_membership.items()
    ]
    groups.sort(key=lambda g: index.rank(g.reflection.kind_string if g.reflection else ""))

    if groups:
        toc.children = groups
    return toc


def build_page_toc(model, index, restriction=None):
    """Default tree for ``model``, regrouped unless the page is a project or module."""
    toc = default_toc(model, restriction)
    if is_container(model):
        return toc
    return regroup_toc(toc, index)
