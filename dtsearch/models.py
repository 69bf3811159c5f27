# dtsearch/models.py
from sqlmodel import SQLModel, Field
from typing import List, Optional, Union

# Typed views of an npm-search hit. These are plain (non-table) SQLModel
# classes: validated on the way in, never persisted. Field aliases carry the
# index's camelCase attribute names.


class HighlightResult(SQLModel):
    value: str = ""
    match_level: str = Field(default="none", alias="matchLevel")  # none / partial / full
    fully_highlighted: bool = Field(default=False, alias="fullyHighlighted")
    matched_words: List[str] = Field(default_factory=list, alias="matchedWords")

    @property
    def is_match(self) -> bool:
        return self.match_level != "none"


class HighlightSet(SQLModel):
    name: Optional[HighlightResult] = None
    description: Optional[HighlightResult] = None


class TypesInfo(SQLModel):
    ts: Union[str, bool, None] = None  # "included", "definitely-typed" or false
    definitely_typed: Optional[str] = Field(default=None, alias="definitelyTyped")


class Repository(SQLModel):
    url: Optional[str] = None
    host: Optional[str] = None
    user: Optional[str] = None
    project: Optional[str] = None


class Hit(SQLModel):
    object_id: str = Field(alias="objectID")
    types: Optional[TypesInfo] = None
    downloads_last_30_days: Optional[int] = Field(default=None, alias="downloadsLast30Days")
    human_downloads_last_30_days: Optional[str] = Field(default=None, alias="humanDownloadsLast30Days")
    popular: Optional[bool] = None
    keywords: Optional[List[str]] = None
    description: Optional[str] = None
    modified: Optional[int] = None  # epoch millis
    homepage: Optional[str] = None
    repository: Optional[Repository] = None
    highlight_result: Optional[HighlightSet] = Field(default=None, alias="_highlightResult")

    @property
    def ts(self):
        return self.types.ts if self.types else None

    @property
    def repository_url(self) -> str:
        return (self.repository.url or "") if self.repository else ""

    def highlight_for(self, field: str) -> Optional[HighlightResult]:
        if self.highlight_result is None:
            return None
        return getattr(self.highlight_result, field, None)
