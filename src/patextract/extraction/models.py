"""Record shapes produced by the extractors.

Field names and null-versus-value semantics are the output contract:
``to_dict()`` gives the JSON-ready form consumed downstream.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass


@dataclass(frozen=True, slots=True)
class DescriptionParagraph:
    number: str
    id: str
    text: str


@dataclass(frozen=True, slots=True)
class Claim:
    number: str
    id: str
    text: str


@dataclass(frozen=True, slots=True)
class PatentImage:
    url: str
    figure_number: str | None = None


@dataclass(frozen=True, slots=True)
class ApplicationRef:
    """A related application row; ``application_number`` is its identity."""

    application_number: str
    country_code: str | None = None
    priority_date: str | None = None
    filing_date: str | None = None
    title: str | None = None


@dataclass(frozen=True, slots=True)
class PatentRecord:
    """Bibliographic and technical fields read from one patent page."""

    title: str
    abstract: str | None = None
    description_paragraphs: list[DescriptionParagraph] | None = None
    claims: list[Claim] | None = None
    images: list[PatentImage] | None = None
    filing_date: str | None = None
    assignee: str | None = None
    related_application: str | None = None
    claiming_priority: list[ApplicationRef] | None = None
    family_applications: list[ApplicationRef] | None = None

    def to_dict(self) -> dict[str, object]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class SummaryItem:
    name: str
    percentage: str


@dataclass(frozen=True, slots=True, kw_only=True)
class SearchResultItem:
    """One search listing entry; detail fields stay null until enrichment."""

    id: str
    title: str
    snippet: str
    assignee: str | None = None
    filing_date: str
    grant_date: str | None = None
    publication_date: str | None = None
    url: str
    abstract_text: str | None = None
    description: str | None = None
    description_paragraphs: list[DescriptionParagraph] | None = None
    claims: list[Claim] | None = None
    images: list[PatentImage] | None = None

    def to_dict(self) -> dict[str, object]:
        return asdict(self)


@dataclass(frozen=True, slots=True, kw_only=True)
class SearchResultsPage:
    total_results: str
    top_assignees: list[SummaryItem] | None = None
    top_cpcs: list[SummaryItem] | None = None
    patents: list[SearchResultItem]

    def to_dict(self) -> dict[str, object]:
        return asdict(self)
