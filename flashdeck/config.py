"""
Runtime options for an InMemoryDataSource.

Options are passed explicitly at construction time; nothing is read from the
environment.
"""

from pydantic import BaseModel, ConfigDict, Field


class DataSourceConfig(BaseModel):
    """Behavioural switches for InMemoryDataSource."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    guard_reentrant_writes: bool = Field(
        default=True,
        description=(
            "Reject a write started from an observer while another write "
            "is publishing."
        ),
    )
    check_invariants: bool = Field(
        default=True,
        description=(
            "Validate sort order constraints after every write. Only turn "
            "off for trusted bulk paths."
        ),
    )
