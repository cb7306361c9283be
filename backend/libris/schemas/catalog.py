"""Catalog Schemas — item intake and reading-target payloads.

Invariants:
    - Text fields trimmed and non-empty; optional identifiers trimmed
    - year in 1..9999; volume, issue and target strictly positive
    - BookTargetCreate carries no progress: progress belongs to the loan service
"""

from typing import Annotated

from pydantic import BeforeValidator, Field

from libris.core.domain_types import ReportType
from libris.schemas.fields import (
    NotNull, PositiveInt, RequestSchema, ShortText, Title, Year, strip,
)

Identifier = Annotated[str, Field(min_length=1, max_length=20), BeforeValidator(strip)]
Category = Annotated[str, Field(min_length=1, max_length=100), BeforeValidator(strip)]


class BookCreate(RequestSchema):
    title: Title
    author: ShortText
    year: Year
    category: Category
    isbn: Identifier | None = None


class JournalCreate(RequestSchema):
    title: Title
    volume: PositiveInt
    issue: PositiveInt
    year: Year
    issn: Identifier | None = None


class ResearchReportCreate(RequestSchema):
    title: Title
    author: ShortText
    supervisor: ShortText | None = None
    institution: ShortText
    year: Year
    type: Annotated[ReportType, BeforeValidator(strip)]


class BookTargetCreate(RequestSchema):
    """Annual reading goal, optionally limited to one category."""
    year: Year
    target: PositiveInt
    category: Annotated[Category | None, NotNull] = None
