"""Read-only space and resolution settings shared by resolution passes."""

from __future__ import annotations

from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class Locale(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    code: str = Field(min_length=1)
    name: Optional[str] = None
    default: bool = False
    fallback_code: Optional[str] = Field(default=None, alias="fallbackCode")


class Space(BaseModel):
    """Space metadata snapshot. Locales keep the order they were configured in."""

    model_config = ConfigDict(frozen=True)

    id: Optional[str] = None
    name: Optional[str] = None
    locales: Tuple[Locale, ...] = ()

    @property
    def default_locale(self) -> Optional[Locale]:
        for loc in self.locales:
            if loc.default:
                return loc
        return self.locales[0] if self.locales else None

    def locale_codes(self) -> List[str]:
        return [loc.code for loc in self.locales]


class ResolutionContext(BaseModel):
    model_config = ConfigDict(frozen=True)

    space: Space = Field(default_factory=Space)
    nullify_unresolved: bool = False
