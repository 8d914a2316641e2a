"""
MkDocs plugin that groups API navigation by comment tags.

Hooks into MkDocs' build lifecycle in three steps: read the options when
the build starts, load the TypeDoc project and index its tags once the
files are collected, then rebuild and regroup the table of contents of
every page that documents a reflection.
"""

from __future__ import annotations

import logging
import os

from mkdocs.config import config_options
from mkdocs.config.base import Config as MkDocsConfig
from mkdocs.plugins import BasePlugin

from .indexer import (
    PLUGIN_NAME,
    GroupMatcher,
    build_group_index,
    build_sort_order,
    split_tag_names,
)
from .parser import load_project
from .regroup import build_page_toc

log = logging.getLogger("mkdocs.plugins.tocgroup")


class TocGroupConfig(MkDocsConfig):
    group_tags = config_options.Type((str, list), default="")
    kind_sort_order = config_options.Type((list, str), default=[])
    home_path = config_options.Type(str, default="")
    project_file = config_options.Type(str, default="")
    toc = config_options.Type(list, default=[])


class TocGroupPlugin(BasePlugin[TocGroupConfig]):

    def __init__(self):
        super().__init__()
        self._matcher = GroupMatcher()
        self._sort_order = {}
        self._config_dir = ""
        self._project = None
        self._index = None

    # ── Build phases ──

    def _begin(self, config_dir):
        self._config_dir = config_dir
        self._matcher = GroupMatcher(self.config.get("group_tags", ""))
        kinds = self.config.get("kind_sort_order", [])
        if isinstance(kinds, str):
            kinds = split_tag_names(kinds)
        self._sort_order = build_sort_order(kinds)
        self._project = None
        self._index = None

    def _resolve(self):
        path = self.config.get("project_file", "")
        if not path:
            return
        if not os.path.isabs(path):
            path = os.path.normpath(os.path.join(self._config_dir, path))
        try:
            project = load_project(path)
        except (OSError, ValueError) as exc:
            log.error("tocgroup: cannot load project %s: %s", path, exc)
            return
        self._project = project
        self._index = build_group_index(
            project,
            matcher=self._matcher,
            sort_order=self._sort_order,
            home_path=self.config.get("home_path", ""),
        )
        log.info(
            "tocgroup: %d reflections indexed, %d groups",
            len(project.reflections),
            len(self._index.group_membership),
        )

    def _page_model(self, page):
        if self._project is None:
            return None
        name = (getattr(page, "meta", None) or {}).get("reflection")
        if not name:
            return None
        model = self._project.find(str(name))
        if model is None:
            log.warning("tocgroup: unknown reflection %r on page %s", name, page.url)
        return model

    def is_home_page(self, page):
        if page is None or not getattr(page, "url", None) or self._project is None:
            return False
        try:
            return self._project.metadata[PLUGIN_NAME].home_path in page.url
        except (KeyError, AttributeError, TypeError) as exc:
            log.debug("tocgroup: home page check failed for %s: %s", page.url, exc)
        return False

    # ── MkDocs lifecycle hooks ──

    def on_config(self, config, **kwargs):
        config_dir = os.path.dirname(config.get("config_file_path", "") or "") or os.getcwd()
        self._begin(config_dir)
        return config

    def on_files(self, files, *, config, **kwargs):
        self._resolve()
        return files

    def on_page_context(self, context, *, page, config, nav, **kwargs):
        context["tocgroup_is_home"] = self.is_home_page(page)
        model = self._page_model(page)
        if model is None:
            return context
        context["tocgroup"] = build_page_toc(model, self._index, self.config.get("toc", []))
        return context
