"""
Summary: Run the external publish command for a set of deployment parameters.
Why: Isolate argument construction and exit-status mapping from the cache.
"""

from __future__ import annotations

import shlex
from collections.abc import Callable
from logging import Logger
from pathlib import Path

from appstage.config.settings import BUILD_TOOL_COMMAND, PUBLISH_TIMEOUT_SECONDS
from appstage.platform.logging import log_scope, logger as default_logger
from appstage.platform.process import ProcessOutcome, run_and_capture

from ..domain.errors import (
    BuildFailedError,
    BuildLaunchError,
    BuildTimeoutError,
    MissingConfigurationError,
)
from ..domain.models import ApplicationType, DeploymentParameters
from ..domain.runtime_identifier import HostOS, detect_host_os, runtime_identifier
from .ports import PublisherPort

PUBLISH_LOG_SCOPE = "dotnet-publish"

# Tests skip restore, so the implicit package version check is meaningless and
# would fail when the runtime package version is overridden externally.
_NO_RESTORE_ARGUMENTS: tuple[str, ...] = (
    "--no-restore",
    "-p:VerifyMatchingImplicitPackageVersion=false",
)


def build_arguments(
    parameters: DeploymentParameters,
    output_path: Path,
    *,
    host_os: HostOS | None,
) -> list[str]:
    """Return the build tool arguments (without the executable) for a publish.

    Raises:
        MissingConfigurationError: No target framework was given.
        OSUnsupportedError: A standalone publish on an unrecognized host.
    """
    if not parameters.target_framework:
        raise MissingConfigurationError(
            "A target framework must be specified in the deployment parameters for "
            "applications that require publishing before deployment"
        )

    arguments = [
        "publish",
        "--output",
        str(output_path),
        "--framework",
        parameters.target_framework,
        "--configuration",
        parameters.configuration,
    ]
    if not parameters.restore_on_publish:
        arguments.extend(_NO_RESTORE_ARGUMENTS)

    if parameters.application_type is ApplicationType.STANDALONE:
        arguments.extend(
            ["--runtime", runtime_identifier(host_os, parameters.runtime_architecture)]
        )

    arguments.extend(shlex.split(parameters.additional_publish_parameters))
    return arguments


class DotnetPublisher(PublisherPort):
    """Publish applications by running the build tool as a child process."""

    _command: str
    _timeout_seconds: float
    _host_os: HostOS | None
    _logger: Logger
    _runner: Callable[..., ProcessOutcome]

    def __init__(
        self,
        *,
        command: str = BUILD_TOOL_COMMAND,
        timeout_seconds: float = PUBLISH_TIMEOUT_SECONDS,
        host_os: HostOS | None = None,
        logger: Logger | None = None,
        runner: Callable[..., ProcessOutcome] = run_and_capture,
    ) -> None:
        self._command = command
        self._timeout_seconds = timeout_seconds
        self._host_os = host_os if host_os is not None else detect_host_os()
        self._logger = logger or default_logger
        self._runner = runner

    def publish(self, parameters: DeploymentParameters, output_path: Path) -> None:
        """Publish ``parameters.application_path`` into ``output_path``.

        Blocks until the build tool exits or the timeout elapses. A timed-out
        process is not killed.

        Raises:
            MissingConfigurationError: No target framework was given.
            OSUnsupportedError: Standalone publish on an unrecognized host.
            BuildLaunchError: The build tool could not be started.
            BuildTimeoutError: The build tool did not exit in time.
            BuildFailedError: The build tool exited with a non-zero status.
        """
        with log_scope(PUBLISH_LOG_SCOPE):
            command = [
                self._command,
                *build_arguments(parameters, output_path, host_os=self._host_os),
            ]
            self._logger.info("Executing command %s", shlex.join(command))

            try:
                outcome = self._runner(
                    command,
                    cwd=parameters.application_path,
                    timeout=self._timeout_seconds,
                    env=parameters.publish_environment_variables,
                    log_prefix=PUBLISH_LOG_SCOPE,
                    log=self._logger,
                )
            except OSError as exc:
                message = f"Failed to start {self._command}: {exc}"
                self._logger.error(message)
                raise BuildLaunchError(message) from exc

            if outcome.exit_code is None:
                error = BuildTimeoutError(self._command, self._timeout_seconds)
                self._logger.error(str(error))
                raise error

            if outcome.exit_code != 0:
                error = BuildFailedError(self._command, outcome.exit_code)
                self._logger.error(str(error))
                raise error

            self._logger.info(
                "%s publish finished with exit code : %s", self._command, outcome.exit_code
            )


__all__ = ["DotnetPublisher", "PUBLISH_LOG_SCOPE", "build_arguments"]
