"""
Tag indexer: one pass over every reflection of a build.

Collects which symbols carry a grouping tag (and under which group key),
which are deprecated, and how top-level groups should be ordered by kind.
The resulting ``GroupIndex`` is attached to the project and handed to the
regrouper for every rendered page.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from .models import kind_label

log = logging.getLogger("mkdocs.plugins.tocgroup")

PLUGIN_NAME = "toc-group"

DEFAULT_GROUP_TAGS = ("group", "kind", "platform")
DEPRECATED_TAG = "deprecated"

_LINE_BREAK_RE = re.compile(r"\r\n?|\n")


def split_tag_names(value):
    """Split a comma-separated option value; blanks dropped, first occurrence kept."""
    if isinstance(value, (list, tuple)):
        value = ",".join(str(v) for v in value)
    names = []
    for part in (value or "").split(","):
        part = part.strip()
        if part and part not in names:
            names.append(part)
    return names


class GroupMatcher:
    """Recognizes grouping tags and the kinds excluded from grouped navigation.

    The same configured names drive both checks: a child whose kind label
    (or ``!<kind number>``) equals a grouping tag name is dropped from every
    group. Nothing obviously intends tag names to double as kind names, but
    existing configurations depend on it.
    """

    def __init__(self, user_tags=""):
        self.names = tuple(split_tag_names(list(DEFAULT_GROUP_TAGS) + split_tag_names(user_tags)))
        self._folded = {n.lower() for n in self.names}

    def is_grouping_tag_name(self, name):
        return name in self.names

    def is_excluded_kind(self, kind):
        probes = (f"!{int(kind)}", kind_label(kind).lower())
        return any(p and p in self._folded for p in probes)

    def __repr__(self):
        return f"GroupMatcher({', '.join(self.names)})"


def is_deprecated_tag_name(name):
    return name == DEPRECATED_TAG


def build_sort_order(kinds):
    """Map lower-cased kind names to their position in ``kinds``."""
    order = {}
    for idx, kind in enumerate(kinds or []):
        order[str(kind).lower()] = idx
    return order


def default_home_path(project_name):
    return f"modules/_index_.{project_name.replace('-', '')}.html"


def group_key(tag):
    """First line of the tag body; an empty body is the (valid) key ``""``."""
    return _LINE_BREAK_RE.split(tag.text or "", 1)[0]


@dataclass
class GroupIndex:
    matcher: GroupMatcher
    home_path: str
    sort_order: dict[str, int] = field(default_factory=dict)
    grouped_names: set[str] = field(default_factory=set)
    deprecated_names: set[str] = field(default_factory=set)
    group_membership: dict[str, list[str]] = field(default_factory=dict)

    def rank(self, kind_string):
        return self.sort_order.get((kind_string or "").lower(), 0)


def build_group_index(project, matcher=None, sort_order=None, home_path=""):
    """Scan every reflection of ``project`` and attach the resulting index.

    Reflections are visited in declaration order and their tags in comment
    order. A deprecation tag never stops the scan; the first grouping tag
    does, so each symbol ends up in at most one group.
    """
    matcher = matcher or GroupMatcher()
    index = GroupIndex(
        matcher=matcher,
        home_path=home_path or default_home_path(project.name),
        sort_order=dict(sort_order or {}),
    )

    for ref in project.reflections.values():
        for tag in ref.tags:
            if is_deprecated_tag_name(tag.tag_name):
                index.deprecated_names.add(ref.name)
            if matcher.is_grouping_tag_name(tag.tag_name):
                index.grouped_names.add(ref.name)
                index.group_membership.setdefault(group_key(tag), []).append(ref.name)
                break

    project.metadata[PLUGIN_NAME] = index
    log.debug(
        "tocgroup: %d groups, %d grouped, %d deprecated symbols",
        len(index.group_membership),
        len(index.grouped_names),
        len(index.deprecated_names),
    )
    return index
