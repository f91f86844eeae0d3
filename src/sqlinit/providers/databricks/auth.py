"""
Databricks Authentication Helpers

Builds a validated WorkspaceClient from a profile in ~/.databrickscfg or from
the DATABRICKS_HOST / DATABRICKS_TOKEN environment variables.
"""

import os
from pathlib import Path

from databricks.sdk import WorkspaceClient

from sqlinit.domain.errors import AuthenticationError

DATABRICKS_CONFIG_PATH = Path("~/.databrickscfg")


def create_databricks_client(profile: str | None = None) -> WorkspaceClient:
    """Create authenticated Databricks client

    Args:
        profile: Databricks profile name (e.g., "DEV"). If None, the SDK falls
            back to environment variables, then the DEFAULT profile.

    Returns:
        Authenticated WorkspaceClient instance

    Raises:
        AuthenticationError: If authentication fails or credentials are missing
    """
    try:
        client = WorkspaceClient(profile=profile) if profile else WorkspaceClient()
        validate_auth(client)
        return client
    except Exception as e:
        # validate_auth already wrapped the SDK error; report the SDK error itself
        cause = e.__cause__ if isinstance(e, AuthenticationError) and e.__cause__ else e
        raise AuthenticationError(
            _format_auth_error(cause, profile), "authentication_failed"
        ) from cause


def validate_auth(client: WorkspaceClient) -> None:
    """Validate credentials with a cheap API call."""
    try:
        client.current_user.me()
    except Exception as e:
        raise AuthenticationError(
            f"Authentication validation failed: {e}", "authentication_failed"
        ) from e


def check_profile_exists(profile: str, config_path: Path = DATABRICKS_CONFIG_PATH) -> bool:
    """Check if a profile section exists in the Databricks config file."""
    path = config_path.expanduser()
    if not path.exists():
        return False
    try:
        return f"[{profile}]" in path.read_text(encoding="utf-8")
    except OSError:
        return False


def _format_auth_error(error: Exception, profile: str | None) -> str:
    """Format authentication error with troubleshooting hints."""
    messages = ["Failed to authenticate with Databricks"]

    if profile:
        messages.append(f"Profile: {profile}")
        if not check_profile_exists(profile):
            messages.append(f"\nProfile '{profile}' not found in ~/.databrickscfg")
            messages.append(f"Run 'databricks configure --profile {profile}'")
    else:
        messages.append("Profile: DEFAULT or environment variables")
        has_env_vars = bool(os.getenv("DATABRICKS_HOST") and os.getenv("DATABRICKS_TOKEN"))
        if not has_env_vars and not check_profile_exists("DEFAULT"):
            messages.append("\nNo authentication configured")
            messages.append("  export DATABRICKS_HOST=https://your-workspace.cloud.databricks.com")
            messages.append("  export DATABRICKS_TOKEN=dapi...")

    messages.append(f"\nError details: {error}")
    return "\n".join(messages)
