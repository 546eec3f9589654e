"""Typed references from a credit log entry to the record that caused it."""
from dataclasses import dataclass
from typing import Optional, Union
from uuid import UUID

from visitswap.constants import RelatedModel


@dataclass(frozen=True)
class VisitRef:
    id: UUID
    kind: str = RelatedModel.VISIT_LOG


@dataclass(frozen=True)
class SiteRef:
    id: UUID
    kind: str = RelatedModel.SITE


Reference = Union[VisitRef, SiteRef]


def reference_from_columns(related_id: Optional[UUID], related_model: Optional[str]) -> Optional[Reference]:
    """
    Build the typed reference stored in ``related_id``/``related_model``.

    Returns:
        VisitRef, SiteRef, or None when the entry references nothing

    Raises:
        ValueError: If ``related_model`` names an unknown kind
    """
    if related_id is None or related_model is None:
        return None
    if related_model == RelatedModel.VISIT_LOG:
        return VisitRef(related_id)
    if related_model == RelatedModel.SITE:
        return SiteRef(related_id)
    raise ValueError(f"Unknown related model: {related_model}")
