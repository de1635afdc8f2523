"""
Immutable flashcard value type.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class Flashcard(BaseModel):
    """
    A single flashcard: identity, question/answer text and display position.

    Instances are frozen. Use the ``with_*`` methods to derive a modified copy;
    the receiver is never changed.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: Optional[int] = Field(
        default=None,
        ge=0,
        description="Stable identity. None until first stored in a data source.",
    )
    front: str = Field(
        ...,
        description="Question text shown on the front of the card.",
    )
    back: str = Field(
        ...,
        description="Answer text shown on the back of the card.",
    )
    sort_order: int = Field(
        ...,
        description="Display position key; unique and non-negative once stored.",
    )

    def _derive(self, **changes: Any) -> Flashcard:
        """Build a validated copy with ``changes`` applied.

        Raises:
            ValidationError: If a changed field breaks the field constraints.
        """
        return type(self).model_validate({**self.model_dump(), **changes})

    def with_id(self, new_id: int) -> Flashcard:
        return self._derive(id=new_id)

    def with_front(self, text: str) -> Flashcard:
        return self._derive(front=text)

    def with_back(self, text: str) -> Flashcard:
        return self._derive(back=text)

    def with_sort_order(self, new_sort_order: int) -> Flashcard:
        """Return a copy of this card placed at ``new_sort_order``."""
        return self._derive(sort_order=new_sort_order)
