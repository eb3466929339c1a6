"""Per-invocation build parameters."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from mediagallery.shared.constants import ArtifactFormat


class BuildRequest(BaseModel):
    """One gallery build as requested by the caller.

    ``None`` means "not given": the value is carried over from the previous
    gallery, or taken from Settings for a new one.
    """

    model_config = ConfigDict(frozen=True)

    directory: Path = Field(description="Directory to build the gallery from")
    height: int | None = Field(default=None, description="Preview height override")
    sort_by: str | None = Field(default=None, description="Sort mode override")
    exclude: str | None = Field(default=None, description="Exclusion pattern override")
    procs: int | None = Field(default=None, description="Worker count (<=0 means CPU count)")

    @property
    def artifact_path(self) -> Path:
        """``<parent>/<dirname>.html`` next to the gallery directory."""
        directory = self.directory.resolve()
        return directory.parent / f"{directory.name}{ArtifactFormat.FILE_SUFFIX}"
