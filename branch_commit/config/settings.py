from functools import lru_cache

from pydantic import AliasChoices, BaseModel, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..exceptions import ConfigError

DEFAULT_COMMIT_MESSAGE = "Default commit message"
DEFAULT_BRANCH = "master"


class Settings(BaseSettings):
    """
    Action settings loaded from environment variables.

    GitHub Actions exposes `with:` inputs as INPUT_<NAME> variables and the
    workflow context as GITHUB_* variables, so both are read here. A local
    .env file is honoured for running outside a workflow.
    """

    model_config = SettingsConfigDict(
        env_file=".env", extra="ignore", populate_by_name=True
    )

    # Action inputs
    GITHUB_TOKEN: str = Field(
        default="",
        validation_alias=AliasChoices(
            "INPUT_GITHUB-TOKEN", "INPUT_GITHUB_TOKEN", "GITHUB_TOKEN"
        ),
    )
    COMMIT_MESSAGE: str = Field(
        default="", validation_alias=AliasChoices("INPUT_MESSAGE", "COMMIT_MESSAGE")
    )

    # Workflow context
    GITHUB_HEAD_REF: str = ""
    GITHUB_REPOSITORY: str = ""  # owner/repo
    GITHUB_WORKSPACE: str = "."
    GITHUB_GRAPHQL_URL: str = "https://api.github.com/graphql"
    GITHUB_OUTPUT: str = ""
    GITHUB_ACTIONS: bool = False

    REQUEST_TIMEOUT: float = 30.0  # Seconds per GraphQL request

    # Development and debugging
    DEBUG: bool = Field(
        default=False, validation_alias=AliasChoices("DEBUG", "RUNNER_DEBUG")
    )


class CommitTarget(BaseModel):
    """Everything a single run needs to know about where to commit."""

    owner: str
    repo: str
    branch: str
    message: str
    token: str = Field(repr=False)
    workspace: str = "."

    @property
    def name_with_owner(self) -> str:
        return f"{self.owner}/{self.repo}"


def to_target(settings: Settings) -> CommitTarget:
    """
    Validate settings and build the explicit run configuration.

    Raises:
        ConfigError: If the token is missing or the repository slug is not
            of the form owner/repo.
    """
    token = settings.GITHUB_TOKEN.strip()
    if not token:
        raise ConfigError("GitHub token not found")

    owner, _, repo = settings.GITHUB_REPOSITORY.strip().partition("/")
    if not owner or not repo or "/" in repo:
        raise ConfigError(
            "GITHUB_REPOSITORY must be set to 'owner/repo'",
            detail=f"got {settings.GITHUB_REPOSITORY!r}",
        )

    return CommitTarget(
        owner=owner,
        repo=repo,
        branch=settings.GITHUB_HEAD_REF.strip() or DEFAULT_BRANCH,
        message=settings.COMMIT_MESSAGE.strip() or DEFAULT_COMMIT_MESSAGE,
        token=token,
        workspace=settings.GITHUB_WORKSPACE or ".",
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()


def load_settings() -> Settings:
    """
    Load settings, reporting malformed environment values as a config error.

    Raises:
        ConfigError: If any variable fails validation, e.g. a non-numeric
            REQUEST_TIMEOUT.
    """
    try:
        return get_settings()
    except ValidationError as e:
        raise ConfigError("Invalid configuration in environment", detail=str(e)) from e
