from typing import List

from pydantic import BaseModel, Field


class BatchResult(BaseModel):
    """
    Outcome of a batch upsert or delete.

    Items in ``errors`` failed validation and were skipped; everything in
    ``succeeded`` was written in the same transaction.
    """

    succeeded: List[str] = Field(default_factory=list)
    errors: List[str] = Field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.succeeded) + len(self.errors)
