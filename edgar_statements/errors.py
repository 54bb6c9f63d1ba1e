"""
Exceptions and recoverable issue records.

Only whole-document problems are raised. Row, tag and statement level problems
are collected as ExtractionIssue records so one odd filing never stops a batch.
"""

import logging
from collections import OrderedDict
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .models import FilingContext, StatementKind

logger = logging.getLogger(__name__)


class EdgarStatementsError(Exception):
    """Base exception for statement extraction errors."""
    pass


class MalformedDocumentError(EdgarStatementsError):
    """Document lacks the minimal table/header structure."""
    pass


class ConceptIdentifierError(EdgarStatementsError, ValueError):
    """An onclick attribute does not wrap a concept identifier."""
    pass


class SECClientError(EdgarStatementsError):
    """Fetching a document from EDGAR failed."""
    pass


class IssueKind(Enum):
    STATEMENT_NOT_FOUND = 'StatementNotFound'
    STRUCTURAL_MISMATCH = 'StructuralMismatch'
    CONCEPT_NOT_FOUND = 'ConceptNotFound'
    MALFORMED_DOCUMENT = 'MalformedDocument'


@dataclass(frozen=True)
class ExtractionIssue:
    """A recoverable problem found while extracting one statement."""
    kind: IssueKind
    statement: Optional[StatementKind]
    identifier: str
    message: str
    context: Optional[FilingContext] = None

    def as_row(self) -> 'OrderedDict[str, object]':
        context = self.context
        return OrderedDict([
            ('Year', context.year if context else None),
            ('Quarter', context.quarter if context else None),
            ('CIK', context.cik if context else ''),
            ('AccessionNumber', context.accession_number if context else ''),
            ('Statement', self.statement.value if self.statement else ''),
            ('Kind', self.kind.value),
            ('Identifier', self.identifier),
            ('Message', self.message),
        ])


def record_issue(
    issues: list,
    kind: IssueKind,
    statement: Optional[StatementKind],
    identifier: str,
    message: str,
    context: Optional[FilingContext] = None
) -> ExtractionIssue:
    """Append an issue to `issues` and log it."""
    issue = ExtractionIssue(kind, statement, identifier, message, context)
    issues.append(issue)
    where = f"{context.cik}/{context.accession_number} " if context else ""
    statement_name = statement.label if statement else "filing"
    logger.warning(f"{where}{statement_name}: {kind.value} [{identifier}] {message}")
    return issue
