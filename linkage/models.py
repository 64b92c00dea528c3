from __future__ import annotations

import typing as t
from dataclasses import dataclass, field
from enum import Enum

from linkage.utils import get_path


class ResourceType(str, Enum):
    Asset = "Asset"
    Entry = "Entry"
    Link = "Link"
    Array = "Array"
    Space = "Space"
    ContentType = "ContentType"
    DeletedAsset = "DeletedAsset"
    DeletedEntry = "DeletedEntry"

    @classmethod
    def parse(cls, value: t.Any) -> t.Optional["ResourceType"]:
        """Map a ``sys.type`` / ``sys.linkType`` string to a member, ``None`` if unknown."""
        try:
            return cls(value)
        except ValueError:
            return None


@dataclass(eq=False, repr=False)
class Resource:
    sys: dict = field(default_factory=dict)

    @property
    def id(self) -> t.Optional[str]:
        return self.sys.get("id")

    @property
    def type(self) -> t.Optional[ResourceType]:
        return ResourceType.parse(self.sys.get("type"))

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} id={self.id!r}>"


@dataclass(eq=False, repr=False)
class LocalizableResource(Resource):
    """Resource carrying per-locale field data.

    ``raw_fields`` maps field name -> {locale code -> value} as delivered by the
    sync API. ``localized_fields`` maps locale code -> {field name -> value} and
    is the structure that link resolution rewrites.
    """

    raw_fields: t.Dict[str, t.Any] = field(default_factory=dict)
    localized_fields: t.Dict[str, t.Dict[str, t.Any]] = field(default_factory=dict)
    locale: t.Optional[str] = None

    @property
    def fields(self) -> t.Dict[str, t.Any]:
        if self.locale is None:
            return {}
        return self.localized_fields.get(self.locale, {})

    def get_field(self, name: str, default: t.Any = None) -> t.Any:
        return self.fields.get(name, default)

    def set_locale(self, code: str) -> None:
        if code not in self.localized_fields:
            raise KeyError(f"No localized fields for locale: {code}")
        self.locale = code


@dataclass(eq=False, repr=False)
class Asset(LocalizableResource):
    @property
    def url(self) -> t.Optional[str]:
        return get_path(self.get_field("file"), "url")

    @property
    def mime_type(self) -> t.Optional[str]:
        return get_path(self.get_field("file"), "contentType")


@dataclass(eq=False, repr=False)
class Entry(LocalizableResource):
    @property
    def content_type_id(self) -> t.Optional[str]:
        return get_path(self.sys, "contentType", "sys", "id")


@dataclass(eq=False, repr=False)
class DeletedResource(Resource):
    """Sync tombstone for a deleted asset or entry."""


@dataclass
class Includes:
    assets: t.Optional[t.List[Resource]] = None
    entries: t.Optional[t.List[Resource]] = None


@dataclass
class SyncedSpace:
    items: t.List[Resource] = field(default_factory=list)
    next_sync_url: t.Optional[str] = None
    next_page_url: t.Optional[str] = None


@dataclass
class ResourceArray:
    items: t.List[Resource] = field(default_factory=list)
    includes: t.Optional[Includes] = None
    total: int = 0
    skip: int = 0
    limit: int = 100
