"""Pydantic models for the vault registry."""

from pydantic import BaseModel, ConfigDict, Field, StrictBool, field_validator

REPO_PATTERN = r"^[a-zA-Z0-9_-]+/[a-zA-Z0-9_.-]+$"


class VaultConfig(BaseModel):
    """One vault: a GitHub repository, optionally narrowed to a sub-directory."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(min_length=1, description="Unique identifier used in routes")
    name: str = Field(min_length=1)
    repo: str = Field(pattern=REPO_PATTERN, description="owner/repo")
    base_path: str | None = Field(
        default=None,
        alias="basePath",
        description="Prefix inside the repository under which the vault lives",
    )
    default: StrictBool
    topics: list[str] = Field(default_factory=list)
    languages: list[str] = Field(default_factory=list)
    readonly: StrictBool

    @field_validator("base_path")
    @classmethod
    def _normalize_base_path(cls, value: str | None) -> str | None:
        if value is None:
            return None
        value = value.strip("/")
        return value or None

    @property
    def owner(self) -> str:
        return self.repo.split("/", 1)[0]
