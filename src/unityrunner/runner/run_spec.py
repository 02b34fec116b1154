"""
Run specification construction.

This module turns build parameters into a platform-specific `docker run`
invocation. The result is a structured argv, so values reach the container
runtime verbatim and are never re-parsed by a shell. Values are not
sanitized; whatever the caller supplies is forwarded as-is.
"""

import logging
import sys
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple

from ..models.parameters import BuildParameters
from ..models.runtime import RunSpec
from ..validation import UnsupportedPlatformError

logger = logging.getLogger(__name__)

LINUX = "linux"
WINDOWS = "win32"

GITHUB_HOME_DIR = "_github_home"
GITHUB_WORKFLOW_DIR = "_github_workflow"
CONTAINER_ID_FILE = "container_id"

CONTAINER_WORKSPACE = "/github/workspace"
COVERAGE_RESULTS_PATH = "CodeCoverage"

ALL_TEST_MODES = ["playmode", "editmode", "COMBINE_RESULTS"]
TEST_PLATFORM_SEPARATOR = ";"

# Forwarded from the host environment by name, in this order.
LICENSE_ENV_VARS = [
    "UNITY_LICENSE",
    "UNITY_LICENSE_FILE",
    "UNITY_EMAIL",
    "UNITY_PASSWORD",
    "UNITY_SERIAL",
]
CI_ENV_VARS = [
    "GITHUB_REF",
    "GITHUB_SHA",
    "GITHUB_REPOSITORY",
    "GITHUB_ACTOR",
    "GITHUB_WORKFLOW",
    "GITHUB_HEAD_REF",
    "GITHUB_BASE_REF",
    "GITHUB_EVENT_NAME",
]
# GITHUB_WORKSPACE is bound explicitly between these two groups.
RUNNER_ENV_VARS = [
    "GITHUB_ACTION",
    "GITHUB_EVENT_PATH",
    "RUNNER_OS",
    "RUNNER_TOOL_CACHE",
    "RUNNER_TEMP",
    "RUNNER_WORKSPACE",
]
PASSTHROUGH_ENV_VARS = LICENSE_ENV_VARS + CI_ENV_VARS + RUNNER_ENV_VARS


def compute_test_platforms(test_mode: str) -> str:
    """
    Return the TEST_PLATFORMS selector for a test mode.

    >>> compute_test_platforms("all")
    'playmode;editmode;COMBINE_RESULTS'
    >>> compute_test_platforms("editmode")
    'editmode'
    """
    modes = ALL_TEST_MODES if test_mode == "all" else [test_mode]
    return TEST_PLATFORM_SEPARATOR.join(modes)


def container_id_path(runner_temporary_path: str) -> str:
    """Path of the file the runtime writes the container id to."""
    return str(Path(runner_temporary_path) / CONTAINER_ID_FILE)


def ensure_scratch_directories(runner_temporary_path: str) -> Tuple[str, str]:
    """
    Create the home and workflow scratch directories if absent.

    Returns:
        Tuple of (github_home, github_workflow) host paths
    """
    github_home = Path(runner_temporary_path) / GITHUB_HOME_DIR
    github_workflow = Path(runner_temporary_path) / GITHUB_WORKFLOW_DIR
    for directory in (github_home, github_workflow):
        directory.mkdir(parents=True, exist_ok=True)
    return str(github_home), str(github_workflow)


def _optional(value: Optional[str]) -> str:
    return "" if value is None else str(value)


def _env(name: str, value: Optional[str] = None) -> List[str]:
    if value is None:
        return ["--env", name]
    return ["--env", f"{name}={value}"]


def _volume(mapping: str) -> List[str]:
    return ["--volume", mapping]


def _common_env(parameters: BuildParameters) -> List[str]:
    """Environment declarations shared by both platforms, in contract order."""
    args: List[str] = []
    for name in LICENSE_ENV_VARS:
        args += _env(name)
    args += _env("UNITY_VERSION", parameters.editor_version)
    args += _env("PROJECT_PATH", parameters.project_path)
    args += _env("CUSTOM_PARAMETERS", parameters.custom_parameters)
    args += _env("TEST_PLATFORMS", compute_test_platforms(parameters.test_mode))
    args += _env("COVERAGE_OPTIONS", parameters.coverage_options)
    args += _env("COVERAGE_RESULTS_PATH", COVERAGE_RESULTS_PATH)
    args += _env("ARTIFACTS_PATH", parameters.artifacts_path)
    for name in CI_ENV_VARS:
        args += _env(name)
    args += _env("GITHUB_WORKSPACE", CONTAINER_WORKSPACE)
    for name in RUNNER_ENV_VARS:
        args += _env(name)
    args += _env("GIT_PRIVATE_TOKEN", _optional(parameters.git_private_token))
    args += _env("CHOWN_FILES_TO", _optional(parameters.chown_files_to))
    return args


def _run_prologue(parameters: BuildParameters) -> List[str]:
    return [
        "run",
        "--workdir", CONTAINER_WORKSPACE,
        "--cidfile", container_id_path(parameters.runner_temporary_path),
        "--rm",
    ]


def _run_epilogue(parameters: BuildParameters, image: str) -> List[str]:
    args: List[str] = []
    if parameters.use_host_network:
        args.append("--net=host")
    # With a token the entrypoint reports results itself, so the exit code is ignored.
    args += _env("USE_EXIT_CODE", "false" if parameters.github_token else "true")
    args.append(image)
    return args


def build_linux_spec(image: str, parameters: BuildParameters, executable: str = "docker") -> RunSpec:
    """Build the run specification for a Linux host."""
    github_home, github_workflow = ensure_scratch_directories(parameters.runner_temporary_path)
    action_folder = parameters.action_folder

    args = _run_prologue(parameters)
    args += _common_env(parameters)
    if parameters.ssh_agent:
        args += _env("SSH_AUTH_SOCK", "/ssh-agent")
    args += _volume(f"{github_home}:/root:z")
    args += _volume(f"{github_workflow}:/github/workflow:z")
    args += _volume(f"{parameters.workspace}:{CONTAINER_WORKSPACE}:z")
    args += _volume(f"{action_folder}/steps:/steps:z")
    args += _volume(f"{action_folder}/entrypoint.sh:/entrypoint.sh:z")
    if parameters.ssh_agent:
        args += _volume(f"{parameters.ssh_agent}:/ssh-agent")
        args += _volume("/home/runner/.ssh/known_hosts:/root/.ssh/known_hosts:ro")
    args += _run_epilogue(parameters, image)
    args += ["/bin/bash", "-c", "/entrypoint.sh"]

    return RunSpec(executable=executable, arguments=tuple(args))


def build_windows_spec(image: str, parameters: BuildParameters, executable: str = "docker") -> RunSpec:
    """Build the run specification for a Windows host."""
    github_home, github_workflow = ensure_scratch_directories(parameters.runner_temporary_path)
    action_folder = parameters.action_folder

    args = _run_prologue(parameters)
    args += _common_env(parameters)
    if parameters.ssh_agent:
        args += _env("SSH_AUTH_SOCK", "c:/ssh-agent")
    args += _volume(f"{github_home}:c:/root")
    args += _volume(f"{github_workflow}:c:/github/workflow")
    args += _volume(f"{parameters.workspace}:c:/github/workspace")
    args += _volume(f"{action_folder}/steps:c:/steps")
    args += _volume(f"{action_folder}:c:/dist")
    if parameters.ssh_agent:
        args += _volume(f"{parameters.ssh_agent}:c:/ssh-agent")
        args += _volume("c:/Users/Administrator/.ssh/known_hosts:c:/root/.ssh/known_hosts")
    args += _run_epilogue(parameters, image)
    args += ["powershell", "c:/dist/entrypoint.ps1"]

    return RunSpec(executable=executable, arguments=tuple(args))


SpecFactory = Callable[[str, BuildParameters, str], RunSpec]

_PLATFORM_BUILDERS: Dict[str, SpecFactory] = {
    LINUX: build_linux_spec,
    WINDOWS: build_windows_spec,
}


class RunSpecBuilder:
    """
    Selects the platform-specific builder and produces a RunSpec.

    The platform tag defaults to ``sys.platform``; only "linux" and "win32"
    are supported.
    """

    def __init__(self, docker_executable: str = "docker", platform: Optional[str] = None):
        self.docker_executable = docker_executable
        self.platform = platform or sys.platform

    @staticmethod
    def supported_platforms() -> List[str]:
        return list(_PLATFORM_BUILDERS)

    def build(self, image: str, parameters: BuildParameters) -> RunSpec:
        """
        Build the run specification for the configured platform.

        Raises:
            UnsupportedPlatformError: If the platform has no builder. Nothing is
                created on disk in that case.
        """
        factory = _PLATFORM_BUILDERS.get(self.platform)
        if factory is None:
            raise UnsupportedPlatformError(self.platform)

        spec = factory(image, parameters, self.docker_executable)
        logger.debug(f"Built {self.platform} run spec: {spec.command_line}")
        return spec
