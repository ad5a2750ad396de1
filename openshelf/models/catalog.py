"""Catalog domain models: book and author summaries, book details, pages.

Pydantic v2 models with frozen config.  Summaries are the lightweight rows
accumulated per partition (genre or subject); ``BookDetails`` is the fully
resolved record held in the entity cache.

Open Library returns a work's description either as a bare string or as a
``{"type": "/type/text", "value": "..."}`` object.  Both shapes are parsed
into the two-case :data:`Description` variant (``PlainText`` /
``StructuredText``); turning either into display text is done by
:func:`describe`, never by the cache.
"""

from __future__ import annotations

from typing import Annotated, Any, Generic, Literal, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

# ---------------------------------------------------------------------------
# Description variant
# ---------------------------------------------------------------------------


class PlainText(BaseModel):
    """A description delivered as a bare string."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["plain"] = "plain"
    text: str


class StructuredText(BaseModel):
    """A description delivered as an Open Library ``/type/text`` object."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["structured"] = "structured"
    value: str
    type: str | None = None  # usually "/type/text"


Description = Annotated[Union[PlainText, StructuredText], Field(discriminator="kind")]


def describe(description: PlainText | StructuredText | None) -> str:
    """Return the display text of a description, ``""`` when absent."""
    if description is None:
        return ""
    if isinstance(description, PlainText):
        return description.text
    return description.value


# ---------------------------------------------------------------------------
# Entity records
# ---------------------------------------------------------------------------


class AuthorRef(BaseModel):
    """An author credited on a work, reduced to the display name."""

    model_config = ConfigDict(frozen=True)

    name: str


class BookDetails(BaseModel):
    """Fully resolved record for a single work.

    ``id`` is always overwritten with the lookup key when the record is
    written to the entity cache, so a payload with a stale or missing id is
    still tagged correctly.
    """

    model_config = ConfigDict(frozen=True)

    id: str = ""
    title: str = ""
    covers: list[int] | None = None
    description: Description | None = None
    authors: list[AuthorRef] = Field(default_factory=list)

    @field_validator("description", mode="before")
    @classmethod
    def _coerce_description(cls, value: Any) -> Any:
        if isinstance(value, str):
            return {"kind": "plain", "text": value}
        if isinstance(value, dict) and "kind" not in value and "value" in value:
            return {"kind": "structured", **value}
        return value

    @property
    def first_cover_id(self) -> int | None:
        if self.covers:
            return self.covers[0]
        return None


class BookSummary(BaseModel):
    """One row of a genre listing."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    author: str = ""
    type: str = ""  # the genre the row was listed under
    cover_id: int | None = None


class AuthorSummary(BaseModel):
    """One row of a subject's author listing, keyed by the Open Library author key."""

    model_config = ConfigDict(frozen=True)

    key: str
    name: str
    top_work: str | None = None
    work_count: int = 0

    @property
    def id(self) -> str:
        return self.key


# ---------------------------------------------------------------------------
# Pages
# ---------------------------------------------------------------------------

SummaryT = TypeVar("SummaryT", BookSummary, AuthorSummary)


class CollectionPage(BaseModel, Generic[SummaryT]):
    """Result of one collection fetch: the page's rows plus the partition total."""

    model_config = ConfigDict(frozen=True)

    items: list[SummaryT] = Field(default_factory=list)
    total: int = 0
