from typing import List
from pydantic import BaseModel, Field, ConfigDict, model_validator

class RepositoryDescriptor(BaseModel):
    """
    Immutable domain model representing a GitLab project (one RPM package repository).
    """
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Display name of the project")
    id: int = Field(..., description="Numeric GitLab project ID")
    web_url: str = Field(..., description="Browser URL of the project")


class FileTreeEntry(BaseModel):
    """A single entry of a repository file tree listing."""
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Base name of the file or directory")
    path: str = Field(default="", description="Path relative to the repository root")
    type: str = Field(default="", description="'blob' for files, 'tree' for directories")


class AnalysisResult(BaseModel):
    """
    Final artifact of a survey run. Field order matches the persisted JSON layout.
    """
    model_config = ConfigDict(frozen=True)

    total_packages: int = Field(..., ge=0, description="Number of repositories analyzed")
    testing_farm_packages: List[RepositoryDescriptor] = Field(
        default_factory=list,
        description="Repositories with fmf metadata, in encounter order"
    )
    analysis_date: str = Field(..., description="Local timestamp, YYYY-MM-DD HH:MM:SS")

    @model_validator(mode="after")
    def _matches_fit_in_total(self) -> "AnalysisResult":
        if len(self.testing_farm_packages) > self.total_packages:
            raise ValueError("testing_farm_packages cannot outnumber total_packages.")
        return self
