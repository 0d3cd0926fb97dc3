"""Decorators for command functions."""

import asyncio
import functools
import inspect
import logging
import time
import traceback
from collections.abc import Callable

import typer

from porefect_cli.api.errors import (
    APIError,
    ConnectivityError,
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
)
from porefect_cli.config import get_config_manager
from porefect_cli.services.auth_service import AuthService
from porefect_cli.services.scheduling_form import ValidationError
from porefect_cli.ui.formatters import format_error, set_color
from porefect_cli.utils import exit_codes
from porefect_cli.utils.logger import get_logger


def _require_auth(profile: str = "default") -> None:
    """Require a signed-in user for the profile."""
    if not AuthService(get_config_manager(profile)).is_authenticated():
        format_error("Not logged in. Use 'porefect auth login' to sign in.")
        raise typer.Exit(exit_codes.ERROR_AUTH_FAILURE)


class AppError(Exception):
    """Custom application error with exit code."""

    def __init__(self, message: str, exit_code: int = exit_codes.ERROR_GENERAL):
        super().__init__(message)
        self.exit_code = exit_code


def _api_exit_code(error: APIError) -> int:
    if isinstance(error, UnauthorizedError):
        return exit_codes.ERROR_AUTH_FAILURE
    if isinstance(error, ForbiddenError):
        return exit_codes.ERROR_PERMISSION_DENIED
    if isinstance(error, NotFoundError):
        return exit_codes.ERROR_NOT_FOUND
    if isinstance(error, ConnectivityError):
        return exit_codes.ERROR_NETWORK
    return exit_codes.ERROR_GENERAL


def _log_failure(
    logger: logging.Logger, cmd: str, start: float, code: int, error: Exception
) -> None:
    logger.error(
        "command failed: %s (%.3fs) %s - %s",
        cmd,
        time.monotonic() - start,
        exit_codes.get_exit_code_name(code),
        error,
    )


def command_wrapper(_func: Callable | None = None, *, auth_required: bool = True):
    """Decorator to wrap command functions with common functionality."""

    def decorator(func: Callable):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            logger = get_logger()
            cmd = func.__name__
            start = time.monotonic()
            logger.info("command started: %s", cmd)
            profile = kwargs.get("profile", "default")
            set_color(get_config_manager(profile).get("output.color"))
            try:
                if auth_required:
                    _require_auth(profile)

                if inspect.iscoroutinefunction(func):
                    result = asyncio.run(func(*args, **kwargs))
                else:
                    result = func(*args, **kwargs)

                elapsed = time.monotonic() - start
                logger.info("command completed: %s (%.3fs)", cmd, elapsed)
                return result

            except AppError as e:
                _log_failure(logger, cmd, start, e.exit_code, e)
                format_error(str(e))
                raise typer.Exit(code=e.exit_code) from e

            except ValidationError as e:
                _log_failure(logger, cmd, start, exit_codes.ERROR_INVALID_ARGS, e)
                for problem in e.problems:
                    format_error(problem)
                raise typer.Exit(code=exit_codes.ERROR_INVALID_ARGS) from e

            except APIError as e:
                code = _api_exit_code(e)
                _log_failure(logger, cmd, start, code, e)
                format_error(str(e))
                raise typer.Exit(code=code) from e

            except typer.Exit:
                # Re-raise Typer's own exits (like --help or explicit Exit(0))
                raise

            except Exception as e:
                elapsed = time.monotonic() - start
                logger.error(
                    "command failed: %s (%.3fs) - %s\n%s",
                    cmd,
                    elapsed,
                    str(e),
                    traceback.format_exc(),
                )
                format_error(f"An unexpected error occurred: {str(e)}")
                raise typer.Exit(code=exit_codes.ERROR_GENERAL) from e

        return wrapper

    if _func is None:
        return decorator
    return decorator(_func)
