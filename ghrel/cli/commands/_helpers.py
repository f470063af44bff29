from __future__ import annotations

from typing import NoReturn

import typer

from ghrel.core.errors import ErrorCode
from ghrel.hosting.errors import AssetUploadError, AuthError, HostingError
from ghrel.output.console import ConsoleProtocol


def error_code_for(error: HostingError) -> ErrorCode:
    # Asset uploads keep their own error type on a 401.
    if isinstance(error, AuthError) or error.status == 401:
        return ErrorCode.ENV_ERROR
    return ErrorCode.NETWORK_ERROR


def fail(console: ConsoleProtocol, error: HostingError) -> NoReturn:
    console.error(error.pretty())
    if isinstance(error, AssetUploadError):
        done = ", ".join(error.uploaded) or "none"
        console.warning(f"release {error.release_id} exists with partial assets (uploaded: {done})")
    raise typer.Exit(code=int(error_code_for(error)))


def exit_with(console: ConsoleProtocol, message: str, code: ErrorCode) -> NoReturn:
    console.error(message)
    raise typer.Exit(code=int(code))
