# This project was developed with assistance from AI tools.
"""Admin endpoint schemas."""

from pydantic import BaseModel


class SeedResponse(BaseModel):
    created: list[str]
    updated: list[str]
    unchanged: list[str]
