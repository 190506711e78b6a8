"""Static document-type catalog: flows, questions, options and aliases."""

from catalog.models import Catalog, DocumentTypeEntry, Option, Question
from catalog.document_types import default_catalog

__all__ = ["Catalog", "DocumentTypeEntry", "Option", "Question", "default_catalog"]
