"""
Loader for TypeDoc JSON project exports (``typedoc --json``).

Builds the reflection graph the grouping engine works on. Handles both
comment layouts TypeDoc has emitted over time:
  - ``comment.tags``: ``[{"tag": "group", "text": "Alpha\\n"}]``
  - ``comment.blockTags``: ``[{"tag": "@group", "content": [{"text": "Alpha"}]}]``

Also assigns each reflection the URL the TypeDoc default theme would give
it, so navigation items can link somewhere sensible.
"""

from __future__ import annotations

import json
import re

from .models import CommentTag, ProjectReflection, Reflection, ReflectionKind

_URL_DIRS = {
    ReflectionKind.CLASS: "classes",
    ReflectionKind.INTERFACE: "interfaces",
    ReflectionKind.ENUM: "enums",
    ReflectionKind.MODULE: "modules",
    ReflectionKind.EXTERNAL_MODULE: "modules",
    ReflectionKind.NAMESPACE: "modules",
}

# Kind numbers of TypeDoc 0.23+ exports (root kind 1, ``blockTags``
# comments). Older exports use the ReflectionKind values directly.
MODERN_KINDS = {
    0x1: ReflectionKind.GLOBAL,
    0x2: ReflectionKind.MODULE,
    0x4: ReflectionKind.NAMESPACE,
    0x8: ReflectionKind.ENUM,
    0x10: ReflectionKind.ENUM_MEMBER,
    0x20: ReflectionKind.VARIABLE,
    0x40: ReflectionKind.FUNCTION,
    0x80: ReflectionKind.CLASS,
    0x100: ReflectionKind.INTERFACE,
    0x200: ReflectionKind.CONSTRUCTOR,
    0x400: ReflectionKind.PROPERTY,
    0x800: ReflectionKind.METHOD,
    0x1000: ReflectionKind.CALL_SIGNATURE,
    0x2000: ReflectionKind.INDEX_SIGNATURE,
    0x4000: ReflectionKind.CONSTRUCTOR_SIGNATURE,
    0x8000: ReflectionKind.PARAMETER,
    0x10000: ReflectionKind.TYPE_LITERAL,
    0x20000: ReflectionKind.TYPE_PARAMETER,
    0x40000: ReflectionKind.ACCESSOR,
    0x80000: ReflectionKind.GET_SIGNATURE,
    0x100000: ReflectionKind.SET_SIGNATURE,
    0x200000: ReflectionKind.TYPE_ALIAS,
    0x400000: ReflectionKind.REFERENCE,
}

_CSS_SAFE_RE = re.compile(r"[^a-z0-9]+")


def _tag_text(raw):
    if "text" in raw:
        return raw.get("text") or ""
    parts = raw.get("content") or []
    return "".join(p.get("text", "") for p in parts if isinstance(p, dict))


def parse_tags(comment):
    """Extract comment tags in declaration order; leading ``@`` is dropped."""
    if not isinstance(comment, dict):
        return []
    raw_tags = list(comment.get("tags") or []) + list(comment.get("blockTags") or [])
    tags = []
    for raw in raw_tags:
        if not isinstance(raw, dict):
            continue
        name = str(raw.get("tag") or raw.get("tagName") or "")
        if name.startswith("@"):
            name = name[1:]
        if not name:
            continue
        tags.append(CommentTag(tag_name=name, text=_tag_text(raw)))
    return tags


def _is_int(value):
    return isinstance(value, int) and not isinstance(value, bool)


def _children(node):
    children = node.get("children")
    if children is None:
        return []
    if not isinstance(children, list):
        raise ValueError(f"bad reflection node: {node!r}")
    return [c for c in children if isinstance(c, dict)]


def _check_node(node):
    if not isinstance(node.get("name"), str) or not _is_int(node.get("kind")):
        raise ValueError(f"bad reflection node: {node!r}")
    if "id" in node and not _is_int(node["id"]):
        raise ValueError(f"bad reflection node: {node!r}")


def _survey(data):
    """Return ``(modern, max_id)`` for a whole export."""
    modern = data.get("kind") == 1
    max_id = 0
    stack = _children(data)
    while stack:
        node = stack.pop()
        _check_node(node)
        max_id = max(max_id, node.get("id", 0))
        comment = node.get("comment")
        if isinstance(comment, dict) and "blockTags" in comment:
            modern = True
        stack.extend(_children(node))
    return modern, max_id


def _css_classes(ref):
    label = ref.kind_string.lower()
    if not label:
        return ""
    return "tsd-kind-" + _CSS_SAFE_RE.sub("-", label).strip("-")


def _url_for(ref):
    directory = _URL_DIRS.get(ref.kind)
    if directory:
        alias = ref.get_full_name().lower().replace('"', "").replace("/", "_")
        return f"{directory}/{alias}.html"
    parent = ref.parent
    if parent is None or isinstance(parent, ProjectReflection):
        return f"globals.html#{ref.name.lower()}"
    base = parent.url.split("#", 1)[0]
    return f"{base}#{ref.name.lower()}"


class _Builder:
    def __init__(self, project, modern, max_id):
        self.project = project
        self.modern = modern
        self._next_id = max_id + 1

    def kind(self, value):
        if self.modern:
            return MODERN_KINDS.get(value, value)
        return value

    def node_id(self, node):
        if "id" in node:
            return node["id"]
        # Ids nobody declared; start above every explicit one.
        nid = self._next_id
        self._next_id += 1
        return nid

    def build(self, node, parent):
        ref = Reflection(
            self.node_id(node),
            node["name"],
            self.kind(node["kind"]),
            tags=parse_tags(node.get("comment")),
        )
        parent.add_child(ref)
        ref.url = _url_for(ref)
        ref.css_classes = _css_classes(ref)
        self.project.register(ref)
        for child in _children(node):
            self.build(child, ref)
        return ref


def parse_project(data):
    """Turn a decoded TypeDoc JSON document into a ``ProjectReflection``.

    Raises ``ValueError`` when a node lacks a string name or an integer kind.
    """
    name = data.get("name", "")
    if not isinstance(name, str):
        raise ValueError(f"bad project name: {name!r}")
    modern, max_id = _survey(data)
    project = ProjectReflection(name)
    project.url = "index.html"
    builder = _Builder(project, modern, max_id)
    for child in _children(data):
        builder.build(child, project)
    return project


def load_project(path):
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"not a TypeDoc project export: {path}")
    return parse_project(data)
