"""
Default table-of-contents builder.

Produces the per-page navigation tree the regrouper starts from: the
children of the page's nearest module (or the project), with the branch
leading to the current page expanded.
"""

from __future__ import annotations

from .models import NavigationItem, ProjectReflection, ReflectionKind

# Containers with more children than this only show the path to the page.
COLLAPSE_THRESHOLD = 40


def is_container(reflection):
    return isinstance(reflection, ProjectReflection) or reflection.kind_of(
        ReflectionKind.SOME_MODULE
    )


def page_trail(model):
    """Return ``(container, trail)`` for a page model.

    ``trail`` runs from just below the nearest project/module ancestor
    down to ``model`` itself; it is empty when ``model`` is a container.
    A detached reflection with no container above it is its own container.
    """
    trail = []
    while not is_container(model) and model.parent is not None:
        trail.insert(0, model)
        model = model.parent
    return model, trail


def build_toc(model, trail, parent, restriction=None):
    index = trail.index(model) if model in trail else -1
    children = model.children

    if index < len(trail) - 1 and len(children) > COLLAPSE_THRESHOLD:
        child = trail[index + 1]
        item = NavigationItem.create(child, parent, use_short_names=True)
        item.is_in_path = True
        item.is_current = False
        build_toc(child, trail, item)
        return

    for child in children:
        if restriction and child.name not in restriction:
            continue
        if child.kind_of(ReflectionKind.SOME_MODULE):
            continue
        item = NavigationItem.create(child, parent, use_short_names=True)
        if child in trail:
            item.is_in_path = True
            item.is_current = trail[-1] is child
            build_toc(child, trail, item)


def default_toc(model, restriction=None):
    """Build a fresh default tree for the page whose model is ``model``."""
    container, trail = page_trail(model)
    root = NavigationItem()
    build_toc(container, trail, root, restriction)
    return root
