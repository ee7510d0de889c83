from pydantic import BaseModel, Field
from typing import Literal


class RegistryConfig(BaseModel):
    path: str = "data/vaults.yaml"
    path_env: str = "VAULT_REGISTRY_PATH"
    default_policy: Literal["warn", "strict"] = "warn"


class GitHubConfig(BaseModel):
    token_env: str = "GITHUB_TOKEN"
    user_agent: str = "OpendhammaApp/v0.1"
    base_url: str | None = None
    web_url: str = "https://github.com"
    default_branch: str = "main"


class CacheConfig(BaseModel):
    enabled: bool = False
    ttl_seconds: int = Field(default=300, ge=0)
    max_entries: int = Field(default=512, gt=0)


class CanonConfig(BaseModel):
    root: str = "tipitaka"
    sutta_dir: str = "tipitaka/sutta"
    preferred_files: list[str] = Field(
        default_factory=lambda: ["en/curated.md", "en/ai.md", "pali.md"]
    )
    language_segments: list[str] = Field(default_factory=lambda: ["en", "pi"])


class AuthConfig(BaseModel):
    admin_emails: list[str] = Field(default_factory=list)
    admin_emails_env: str = "ADMIN_EMAILS"


class OpendhammaConfig(BaseModel):
    registry: RegistryConfig = Field(default_factory=RegistryConfig)
    github: GitHubConfig = Field(default_factory=GitHubConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    canon: CanonConfig = Field(default_factory=CanonConfig)
    auth: AuthConfig = Field(default_factory=AuthConfig)
    log_level: Literal["debug", "info", "warn", "error"] = "info"
    log_format: Literal["text", "json"] = "text"
