from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

DEFAULT_COMMIT_MESSAGE = "Update via GitHub MCP"


class ToolParams(BaseModel):
    """Base for tool argument records. Unknown arguments are ignored."""
    model_config = ConfigDict(extra="ignore", frozen=True)


class GetUserParams(ToolParams):
    """
    Get GitHub user information
    """
    username: str = Field(..., description="GitHub username")


class CreateRepoParams(ToolParams):
    """
    Create a new GitHub repository
    """
    repo_name: str = Field(..., description="The name of the repository to create")
    description: Optional[str] = Field(
        default=None,
        description="A description of the repository"
    )
    private: bool = Field(
        default=False,
        description="Whether the repository should be private"
    )


class PushToRepoParams(ToolParams):
    """
    Push content to a GitHub repository
    """
    repo_name: str = Field(..., description="The name of the repository to push to")
    file_path: str = Field(
        ...,
        description="The path where the file should be created in the repository"
    )
    content: str = Field(..., description="The content to push to the repository")
    message: str = Field(
        default=DEFAULT_COMMIT_MESSAGE,
        description="The commit message"
    )
