"""
Build parameter models.

This module contains the immutable input of a single container run.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class BuildParameters:
    """
    Everything a container run needs besides the image reference.
    """

    # Directory holding the action's `steps/` folder and entrypoint scripts.
    action_folder: str
    # Unity editor version exported to the container as UNITY_VERSION.
    editor_version: str
    # Host directory mounted as /github/workspace.
    workspace: str
    # Host scratch directory; the id file and scratch directories live here.
    runner_temporary_path: str

    project_path: str = "."
    custom_parameters: str = ""
    # One of "all", "playmode", "editmode", "standalone".
    test_mode: str = "all"
    coverage_options: str = ""
    artifacts_path: str = "artifacts"
    use_host_network: bool = False
    # Host path of an ssh-agent socket to forward into the container.
    ssh_agent: Optional[str] = None
    git_private_token: Optional[str] = None
    # When present, the run reports its result through the token side channel
    # instead of the process exit code.
    github_token: Optional[str] = None
    chown_files_to: Optional[str] = None
