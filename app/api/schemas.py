from __future__ import annotations

from pydantic import BaseModel, Field


class HealthOut(BaseModel):
    """Liveness response for `/health`."""

    status: str = Field(
        description="`ok` while the process is serving requests.",
        examples=["ok"],
    )


class ErrorOut(BaseModel):
    """Error body returned by every failing endpoint."""

    error: str = Field(description="Human-readable failure message.")
    details: object | None = Field(
        default=None,
        description="Diagnostic payload (e.g. the upstream error body); omitted when absent.",
    )
