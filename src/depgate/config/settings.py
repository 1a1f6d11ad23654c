"""Run configuration - constructed once, passed explicitly to every stage."""

from pydantic import BaseModel, Field
from ..policy.models import PolicyMode
from ..source.github import DEFAULT_API_URL


class RunConfig(BaseModel):
    """Immutable run parameters."""
    policy: PolicyMode = Field(..., description="Policy mode: allow or prohibit")
    policy_url: str = Field(..., min_length=1, description="URL of the remote policy document")
    github_token: str = Field(..., min_length=1, description="Token for the commit source")
    fail_if_violations: bool = Field(default=False, description="Fail the run when violations are found")
    include_dev_dependencies: bool = Field(default=False, description="Also evaluate devDependencies")
    api_url: str = Field(default=DEFAULT_API_URL, description="GitHub REST API base URL")
    timeout: float = Field(default=30.0, gt=0, description="HTTP timeout in seconds")

    class Config:
        frozen = True
