"""Pydantic schemas for asmprobe settings."""

from pydantic import BaseModel
from pydantic import Field
from pydantic import field_validator


class ProbeSettings(BaseModel):
    """The ``probe:`` section of settings.yaml."""

    ignore_file: str = Field("", description="Assembly file name that is never resolved (e.g. the host's own)")
    search_dirs: list[str] = Field(default_factory=list, description="Directories probed in order")
    shared_dir: str | None = Field(None, description="Override for the shared runtime directory")

    @field_validator("search_dirs", mode="before")
    @classmethod
    def _coerce_search_dirs(cls, value):
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        return value


class Settings(BaseModel):
    """Effective settings after merging all scopes."""

    probe: ProbeSettings = Field(default_factory=ProbeSettings)
