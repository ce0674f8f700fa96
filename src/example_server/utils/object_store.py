# Este archivo descarga el fichero de prueba de S3 usando el CLI de AWS (aws s3 cp <origen> -).

"""
Object store access through the AWS CLI.

Streams a remote object to stdout with `aws s3 cp <locator> -` and
returns the captured output. Failures are logged field by field
before being raised as ObjectFetchError.
"""
import subprocess  # Ejecución del CLI de AWS como proceso externo
from typing import List, Optional  # Type hints para listas y valores opcionales

from ..exceptions import ObjectFetchError  # Excepción personalizada para fallos de descarga
from .logging import get_logger  # Logger estructurado

logger = get_logger(__name__)

AWS_CLI = "aws"


def build_copy_command(locator: str) -> List[str]:
    """
    Build the CLI invocation that copies an object to stdout.

    Args:
        locator: Object locator (e.g., s3://bucket/key)

    Returns:
        Argument list for subprocess
    """
    return [AWS_CLI, "s3", "cp", locator, "-"]


def _decode(data: Optional[bytes]) -> Optional[str]:
    if data is None:
        return None
    return data.decode("utf-8", errors="replace")


def _log_failure(
    locator: str,
    status: Optional[int],
    stdout: Optional[str],
    stderr: Optional[str],
    error: Optional[str]
) -> None:
    # One event per field so each shows up on its own line
    logger.error("s3_download_failed", s3_test_file=locator)
    logger.error("s3_download_status", status=status if status is not None else "(no status)")
    logger.error("s3_download_stdout", stdout=stdout or "(no stdout)")
    logger.error("s3_download_stderr", stderr=stderr or "(no stderr)")
    logger.error("s3_download_error_message", error=error or "(no error message defined)")


def fetch_object(locator: str) -> str:
    """
    Copy an object from the object store and return its contents.

    Args:
        locator: Object locator passed verbatim to the CLI

    Returns:
        Object contents decoded as UTF-8

    Raises:
        ObjectFetchError: If the CLI exits non-zero or cannot be executed
    """
    command = build_copy_command(locator)
    logger.info("s3_download_started", s3_test_file=locator)

    try:
        result = subprocess.run(command, capture_output=True)
    except OSError as e:
        _log_failure(locator, None, None, None, str(e))
        raise ObjectFetchError(
            f"Unable to download s3 test file: {locator}",
            context={
                "s3_test_file": locator,
                "status": None,
                "stdout": None,
                "stderr": None,
                "error": str(e)
            }
        ) from e

    stdout = _decode(result.stdout)
    stderr = _decode(result.stderr)

    if result.returncode != 0:
        _log_failure(locator, result.returncode, stdout, stderr, None)
        raise ObjectFetchError(
            f"Unable to download s3 test file: {locator}",
            context={
                "s3_test_file": locator,
                "status": result.returncode,
                "stdout": stdout,
                "stderr": stderr,
                "error": None
            }
        )

    logger.info("s3_download_complete", s3_test_file=locator, size=len(result.stdout or b""))
    return stdout or ""
