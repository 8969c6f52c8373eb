from __future__ import annotations

from pydantic import BaseModel, Field, model_validator


class ConvertRequest(BaseModel):
    html: str | None = None
    url: str | None = Field(default=None, min_length=1)

    @model_validator(mode="after")
    def _exactly_one_source(self) -> "ConvertRequest":
        if (self.html is None) == (self.url is None):
            raise ValueError("provide exactly one of 'html' or 'url'")
        return self


class ConvertResponse(BaseModel):
    latex: str
    bytes: int
    source_url: str | None = None


class HealthResponse(BaseModel):
    status: str = "ok"
    name: str
    version: str
