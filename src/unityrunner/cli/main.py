"""
Command-line interface for the unityrunner application.

This module parses the build parameters from the command line (with the usual
GitHub Actions environment variables as fallbacks), loads the runner
configuration and runs a single build container.
"""

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from ..config import TEST_MODES, get_config, get_config_path, set_config_path
from ..models.config import RunnerConfig
from ..models.parameters import BuildParameters
from ..orchestration import DockerRunner
from ..system import check_executable_installed
from ..validation import (
    ExecutionFailedError,
    RunInterruptedError,
    UnsupportedPlatformError,
    ValidationError,
    handle_cli_error,
    validate_enum_choice,
    validate_non_empty_string,
    validate_path_exists,
)

# --- Logging Setup ---
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)-5.5s] %(name)s:%(filename)s:%(lineno)d\t %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    stream=sys.stdout,
)
logger = logging.getLogger(__name__)

EXIT_USAGE = 2
EXIT_INTERRUPTED = 130


def exit_status(exit_code: int) -> int:
    """Map a client exit code to a process exit status; signal deaths become 128 + signum."""
    if exit_code < 0:
        return 128 - exit_code
    return exit_code or 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Run the Unity test runner inside a single ephemeral container."
    )
    parser.add_argument("--image", required=True, help="Container image reference.")
    parser.add_argument("--editor-version", required=True, help="Unity editor version.")
    parser.add_argument(
        "--workspace",
        default=os.environ.get("GITHUB_WORKSPACE", os.getcwd()),
        help="Host workspace mounted at /github/workspace (default: $GITHUB_WORKSPACE or cwd).",
    )
    parser.add_argument("--project-path", default=".", help="Unity project path inside the workspace.")
    parser.add_argument("--custom-parameters", default="", help="Extra parameters for the Unity editor.")
    parser.add_argument("--test-mode", default=None, help=f"One of {TEST_MODES}.")
    parser.add_argument("--coverage-options", default="", help="Code coverage options.")
    parser.add_argument("--artifacts-path", default="artifacts", help="Where test results are written.")
    parser.add_argument("--use-host-network", action="store_true", help="Share the host network.")
    parser.add_argument("--ssh-agent", default=None, help="Host ssh-agent socket to forward.")
    parser.add_argument("--git-private-token", default=None, help="Token for private git dependencies.")
    parser.add_argument(
        "--github-token",
        default=os.environ.get("GITHUB_TOKEN"),
        help="Token used to report results; when set the exit code is not used (default: $GITHUB_TOKEN).",
    )
    parser.add_argument(
        "--runner-temp",
        default=os.environ.get("RUNNER_TEMP"),
        help="Host scratch directory (default: $RUNNER_TEMP).",
    )
    parser.add_argument("--chown-files-to", default=None, help="User id to chown produced files to.")
    parser.add_argument("--action-folder", default=None, help="Folder holding steps/ and the entrypoint.")
    parser.add_argument("--config", type=Path, default=None, help="Path to config.toml.")
    parser.add_argument("--quiet", action="store_true", help="Suppress the container output.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    return parser


def load_runner_config(config_path: Optional[Path]) -> RunnerConfig:
    """
    Load the runner configuration.

    An explicit path must exist; without one the default file is used when
    present, otherwise built-in defaults apply.
    """
    if config_path is not None:
        set_config_path(config_path)
        return get_config()
    if get_config_path().exists():
        return get_config()
    logger.info("No configuration file found, using built-in defaults")
    return RunnerConfig()


def build_parameters(args: argparse.Namespace, config: RunnerConfig) -> BuildParameters:
    """
    Assemble and validate BuildParameters from parsed arguments.

    Raises:
        ValidationError: If a parameter is missing or invalid
    """
    test_mode = validate_enum_choice(
        args.test_mode or config.default_test_mode,
        choices=TEST_MODES,
        field_name="--test-mode",
    )
    runner_temp = validate_non_empty_string(args.runner_temp, field_name="--runner-temp")
    workspace = validate_path_exists(args.workspace, field_name="--workspace")
    action_folder = validate_path_exists(
        args.action_folder or config.action_folder, field_name="--action-folder"
    )

    return BuildParameters(
        action_folder=action_folder,
        editor_version=validate_non_empty_string(args.editor_version, field_name="--editor-version"),
        workspace=workspace,
        runner_temporary_path=runner_temp,
        project_path=args.project_path,
        custom_parameters=args.custom_parameters,
        test_mode=test_mode,
        coverage_options=args.coverage_options,
        artifacts_path=args.artifacts_path,
        use_host_network=args.use_host_network,
        ssh_agent=args.ssh_agent or None,
        git_private_token=args.git_private_token,
        github_token=args.github_token or None,
        chown_files_to=args.chown_files_to,
    )


def main_cli(argv: Optional[List[str]] = None) -> None:
    """
    Main command-line entry point.

    Exit codes: 0 on success, the container's exit code when the run fails,
    2 for configuration, parameter and platform errors, 128 + signal number
    when interrupted.
    """
    args = build_parser().parse_args(argv)

    try:
        config = load_runner_config(args.config)
    except (FileNotFoundError, ValidationError) as e:
        handle_cli_error(error=e, context="configuration loading", exit_code=EXIT_USAGE, logger=logger)

    level = logging.DEBUG if args.verbose else getattr(logging, config.log_level.upper())
    logging.getLogger().setLevel(level)

    try:
        parameters = build_parameters(args, config)
    except ValidationError as e:
        handle_cli_error(error=e, context="parameter validation", exit_code=EXIT_USAGE, logger=logger)

    if not check_executable_installed(config.docker_executable):
        logger.warning(f"'{config.docker_executable}' was not found on PATH; the run is likely to fail.")

    runner = DockerRunner(config)
    try:
        runner.run(args.image, parameters, quiet=args.quiet)
    except UnsupportedPlatformError as e:
        handle_cli_error(error=e, context="platform check", exit_code=EXIT_USAGE, logger=logger)
    except ExecutionFailedError as e:
        sys.exit(exit_status(e.exit_code))
    except RunInterruptedError as e:
        logger.warning("Container run was terminated prematurely due to a shutdown request.")
        sys.exit(128 + e.signum if e.signum else EXIT_INTERRUPTED)

    logger.info("Container run completed successfully.")


if __name__ == "__main__":
    main_cli()
