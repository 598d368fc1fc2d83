"""Static index loading.

Reads the scraped JSON files under ``<data_dir>/api`` and ``<data_dir>/wiki``
into in-memory lookup tables.  A missing or broken file never aborts start-up:
it is reported on the console and replaced by an empty list.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from enfusion_mcp.utils import load_json_or_default, print_error, print_info

from .models import ClassInfo, GroupInfo, HierarchyNode, MethodInfo, WikiPage

M = TypeVar("M", bound=BaseModel)

INDEX_FILES: dict[str, tuple[str, str]] = {
    "enfusion_classes": ("api", "enfusion-classes.json"),
    "arma_classes": ("api", "arma-classes.json"),
    "hierarchy": ("api", "hierarchy.json"),
    "groups": ("api", "groups.json"),
    "wiki_pages": ("wiki", "pages.json"),
}


@dataclass
class MethodMatch:
    """A method hit from :meth:`IndexData.search_methods`."""

    owner: ClassInfo
    method: MethodInfo


@dataclass
class IndexData:
    """Loaded index plus name-based lookup tables."""

    enfusion_classes: list[ClassInfo] = field(default_factory=list)
    arma_classes: list[ClassInfo] = field(default_factory=list)
    hierarchy: list[HierarchyNode] = field(default_factory=list)
    groups: list[GroupInfo] = field(default_factory=list)
    wiki_pages: list[WikiPage] = field(default_factory=list)

    _by_name: dict[str, ClassInfo] = field(default_factory=dict, init=False, repr=False)
    _by_lower: dict[str, ClassInfo] = field(default_factory=dict, init=False, repr=False)
    _groups: dict[str, GroupInfo] = field(default_factory=dict, init=False, repr=False)
    _subclasses: dict[str, list[str]] = field(default_factory=dict, init=False, repr=False)
    _methods: dict[str, list[MethodMatch]] = field(default_factory=dict, init=False, repr=False)

    def __post_init__(self) -> None:
        # First definition wins; engine classes are listed before game classes.
        for cls in self.classes:
            self._by_name.setdefault(cls.name, cls)
            self._by_lower.setdefault(cls.name.lower(), cls)
            for method in [*cls.methods, *cls.protected_methods]:
                self._methods.setdefault(method.name.lower(), []).append(MethodMatch(cls, method))
        for group in self.groups:
            self._groups.setdefault(group.name.lower(), group)
        for node in self.hierarchy:
            self._subclasses.setdefault(node.name.lower(), node.children)

    @property
    def classes(self) -> list[ClassInfo]:
        return [*self.enfusion_classes, *self.arma_classes]

    @property
    def class_count(self) -> int:
        return len(self.enfusion_classes) + len(self.arma_classes)

    def get_class(self, name: str) -> Optional[ClassInfo]:
        """Look up a class by exact name, then case-insensitively."""
        return self._by_name.get(name) or self._by_lower.get(name.lower())

    def get_group(self, name: str) -> Optional[GroupInfo]:
        return self._groups.get(name.lower())

    def subclasses(self, name: str) -> list[str]:
        """Direct subclasses of *name*, from the class record or ``hierarchy.json``."""
        info = self.get_class(name)
        if info is not None and info.children:
            return list(info.children)
        return list(self._subclasses.get(name.lower(), []))

    def search_classes(self, query: str, source: str = "all", limit: int = 10) -> list[ClassInfo]:
        """Rank classes by how well their name (then brief/description) matches *query*.

        Exact name beats prefix, prefix beats substring, and name matches
        beat matches in the documentation text.  Ties keep index order.
        """
        needle = query.lower().strip()
        if not needle:
            return []
        scored: list[tuple[int, ClassInfo]] = []
        for cls in self._by_lower.values():
            if not _source_matches(cls, source):
                continue
            score = _name_score(cls.name.lower(), needle)
            if not score and needle in cls.brief.lower():
                score = 30
            elif not score and needle in cls.description.lower():
                score = 20
            if score:
                scored.append((score, cls))
        scored.sort(key=lambda item: item[0], reverse=True)
        return [cls for _, cls in scored[:limit]]

    def search_methods(self, query: str, source: str = "all", limit: int = 10) -> list[MethodMatch]:
        """Rank public and protected methods by name match against *query*."""
        needle = query.lower().strip()
        if not needle:
            return []
        scored: list[tuple[int, MethodMatch]] = []
        for name, matches in self._methods.items():
            score = _name_score(name, needle)
            if not score:
                continue
            scored.extend((score, m) for m in matches if _source_matches(m.owner, source))
        scored.sort(key=lambda item: item[0], reverse=True)
        return [match for _, match in scored[:limit]]

    def search_wiki(self, query: str, limit: int = 5) -> list[WikiPage]:
        """Rank pages by query words found in the title (10 each) and content (1 each)."""
        tokens = query.lower().split()
        scored: list[tuple[int, WikiPage]] = []
        for page in self.wiki_pages:
            title = page.title.lower()
            content = page.content.lower()
            score = sum((10 if t in title else 0) + (1 if t in content else 0) for t in tokens)
            if score:
                scored.append((score, page))
        scored.sort(key=lambda item: item[0], reverse=True)
        return [page for _, page in scored[:limit]]


def _name_score(name: str, needle: str) -> int:
    if name == needle:
        return 100
    if name.startswith(needle):
        return 80
    if needle in name:
        return 60
    return 0


def _source_matches(cls: ClassInfo, source: str) -> bool:
    return source == "all" or cls.source.value == source


def _load_list(path: Path, model: type[M]) -> list[M]:
    raw: Any = load_json_or_default(path, [])
    try:
        return TypeAdapter(list[model]).validate_python(raw)  # type: ignore[valid-type]
    except ValidationError as exc:
        print_error(f"Invalid index file {path}: {exc.error_count()} validation error(s)")
        return []


def load_index(data_dir: str | Path) -> IndexData:
    """Load every index file under *data_dir*.

    Args:
        data_dir: Directory containing ``api/`` and ``wiki/``.

    Returns:
        An ``IndexData``; any file that is missing or invalid contributes an
        empty list.
    """
    base = Path(data_dir)
    models: dict[str, type[BaseModel]] = {
        "enfusion_classes": ClassInfo,
        "arma_classes": ClassInfo,
        "hierarchy": HierarchyNode,
        "groups": GroupInfo,
        "wiki_pages": WikiPage,
    }
    loaded = {
        name: _load_list(base.joinpath(*INDEX_FILES[name]), model)
        for name, model in models.items()
    }
    data = IndexData(**loaded)  # type: ignore[arg-type]

    print_info(
        f"Loaded index: {len(data.enfusion_classes)} enfusion + "
        f"{len(data.arma_classes)} arma classes ({data.class_count} total), "
        f"{len(data.groups)} groups, {len(data.wiki_pages)} wiki pages"
    )
    return data
