"""
Reflection and navigation model.

Mirrors the parts of TypeDoc's object model the grouping engine needs:
reflections (one per documented symbol, with comment tags and a kind
bit-flag), the project root that owns them, and the navigation items a
page's table of contents is built from.

Reflections are owned top-down by the project and keep a plain link to
their parent. Navigation items only hold a weak reference to their
parent, since regrouping moves them between trees.
"""

from __future__ import annotations

import weakref
from dataclasses import dataclass
from enum import IntFlag


class ReflectionKind(IntFlag):
    GLOBAL = 0
    EXTERNAL_MODULE = 1
    MODULE = 2
    ENUM = 4
    ENUM_MEMBER = 16
    VARIABLE = 32
    FUNCTION = 64
    CLASS = 128
    INTERFACE = 256
    CONSTRUCTOR = 512
    PROPERTY = 1024
    METHOD = 2048
    CALL_SIGNATURE = 4096
    INDEX_SIGNATURE = 8192
    CONSTRUCTOR_SIGNATURE = 16384
    PARAMETER = 32768
    TYPE_LITERAL = 65536
    TYPE_PARAMETER = 131072
    ACCESSOR = 262144
    GET_SIGNATURE = 524288
    SET_SIGNATURE = 1048576
    OBJECT_LITERAL = 2097152
    TYPE_ALIAS = 4194304
    EVENT = 8388608
    # Only emitted by newer TypeDoc exports; see parser.MODERN_KINDS.
    NAMESPACE = 16777216
    REFERENCE = 33554432

    CLASS_OR_INTERFACE = CLASS | INTERFACE
    SOME_MODULE = MODULE | EXTERNAL_MODULE | NAMESPACE


_KIND_LABELS = {
    ReflectionKind.GLOBAL: "Global",
    ReflectionKind.EXTERNAL_MODULE: "External module",
    ReflectionKind.MODULE: "Module",
    ReflectionKind.ENUM: "Enumeration",
    ReflectionKind.ENUM_MEMBER: "Enumeration member",
    ReflectionKind.VARIABLE: "Variable",
    ReflectionKind.FUNCTION: "Function",
    ReflectionKind.CLASS: "Class",
    ReflectionKind.INTERFACE: "Interface",
    ReflectionKind.CONSTRUCTOR: "Constructor",
    ReflectionKind.PROPERTY: "Property",
    ReflectionKind.METHOD: "Method",
    ReflectionKind.CALL_SIGNATURE: "Call signature",
    ReflectionKind.INDEX_SIGNATURE: "Index signature",
    ReflectionKind.CONSTRUCTOR_SIGNATURE: "Constructor signature",
    ReflectionKind.PARAMETER: "Parameter",
    ReflectionKind.TYPE_LITERAL: "Type literal",
    ReflectionKind.TYPE_PARAMETER: "Type parameter",
    ReflectionKind.ACCESSOR: "Accessor",
    ReflectionKind.GET_SIGNATURE: "Get signature",
    ReflectionKind.SET_SIGNATURE: "Set signature",
    ReflectionKind.OBJECT_LITERAL: "Object literal",
    ReflectionKind.TYPE_ALIAS: "Type alias",
    ReflectionKind.EVENT: "Event",
    ReflectionKind.NAMESPACE: "Namespace",
    ReflectionKind.REFERENCE: "Reference",
}


def kind_label(kind):
    """Human-readable label of a single kind; empty for composites."""
    return _KIND_LABELS.get(kind, "")


@dataclass
class CommentTag:
    tag_name: str
    text: str = ""


class Reflection:
    def __init__(self, id, name, kind, *, parent=None, tags=None, url="", css_classes=""):
        self.id = id
        self.name = name
        self.kind = ReflectionKind(kind)
        self.children: list[Reflection] = []
        self.tags: list[CommentTag] = list(tags or [])
        self.url = url
        self.css_classes = css_classes
        self.parent = parent

    @property
    def kind_string(self):
        return kind_label(self.kind)

    def kind_of(self, kind):
        return bool(self.kind & kind)

    def get_full_name(self, separator="."):
        parent = self.parent
        if parent is None or isinstance(parent, ProjectReflection):
            return self.name
        return f"{parent.get_full_name(separator)}{separator}{self.name}"

    def add_child(self, child):
        child.parent = self
        self.children.append(child)
        return child

    def __repr__(self):
        return f"<{type(self).__name__} {self.kind_string or int(self.kind)} {self.name!r}>"


class ProjectReflection(Reflection):
    """Root of the reflection graph; holds per-build plugin metadata."""

    def __init__(self, name):
        super().__init__(0, name, ReflectionKind.GLOBAL)
        self.reflections: dict[int, Reflection] = {}
        self.metadata: dict = {}
        self._by_full_name: dict[str, Reflection] = {}
        self._by_name: dict[str, Reflection] = {}

    def register(self, reflection):
        """Index ``reflection``; it must already be attached to its parent."""
        self.reflections[reflection.id] = reflection
        self._by_full_name.setdefault(reflection.get_full_name(), reflection)
        self._by_name.setdefault(reflection.name, reflection)

    def find(self, name):
        """Look a reflection up by full name, falling back to its short name."""
        return self._by_full_name.get(name) or self._by_name.get(name)


class NavigationItem:
    def __init__(self, title="", url="", parent=None, css_classes="", reflection=None):
        self.title = title
        self.url = url
        self.css_classes = css_classes
        self.reflection = reflection
        self.children: list[NavigationItem] = []
        self.is_in_path = False
        self.is_current = False
        # Set on synthetic group roots only.
        self.group_title = ""
        self.deprecated = False
        self._parent = None
        self.parent = parent
        if parent is not None:
            parent.children.append(self)

    @property
    def parent(self):
        return self._parent() if self._parent is not None else None

    @parent.setter
    def parent(self, value):
        self._parent = weakref.ref(value) if value is not None else None

    @classmethod
    def create(cls, reflection, parent=None, use_short_names=False):
        title = reflection.name if use_short_names else reflection.get_full_name()
        return cls(
            title,
            reflection.url,
            parent,
            css_classes=reflection.css_classes,
            reflection=reflection,
        )

    def __repr__(self):
        return f"<NavigationItem {self.title!r} children={len(self.children)}>"
