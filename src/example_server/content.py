# Este archivo resuelve el texto de respuesta (S3, EFS o "Hello world!") y lo guarda en caché una sola vez.

"""
Response body resolution and caching.

The body is resolved from a strict priority chain (object store,
shared filesystem, fixed greeting) the first time it is needed and
frozen for the rest of the process lifetime.
"""
from typing import Callable, Optional  # Type hints para funciones y valores opcionales

from .config.settings import Settings  # Configuración del servidor
from .utils.logging import get_logger  # Logger estructurado
from .utils.object_store import fetch_object  # Descarga desde S3 via CLI
from .utils.shared_fs import write_then_read  # Escritura/lectura en EFS

logger = get_logger(__name__)

DEFAULT_SERVER_TEXT = "Hello world!"


def resolve_server_text(settings: Settings) -> str:
    """
    Compute the response body from the configured content source.

    Priority:
    1. S3_TEST_FILE and SERVER_TEXT: SERVER_TEXT, a space, then the object contents
    2. EFS_TEST_FILE and SERVER_TEXT: SERVER_TEXT written to and read back from the file
    3. Otherwise: "Hello world!"

    Args:
        settings: Loaded server settings

    Returns:
        Response body without the trailing newline

    Raises:
        ObjectFetchError: If the object store copy fails
        SharedFileError: If the shared file write/read fails
    """
    if settings.s3_source_configured:
        logger.info("server_text_source", source="s3")
        contents = fetch_object(settings.s3_test_file)
        return settings.server_text + " " + contents

    if settings.efs_source_configured:
        logger.info("server_text_source", source="efs")
        return write_then_read(settings.efs_test_file, settings.server_text)

    logger.info("server_text_source", source="default")
    return DEFAULT_SERVER_TEXT


class ResponseCache:
    """
    Single-assignment cell holding the response body.

    Not thread-safe: two callers racing on an empty cell both run
    compute(). The HTTP server handles one request at a time so the
    race is never hit there.
    """

    def __init__(self):
        self._value: Optional[str] = None

    @property
    def value(self) -> Optional[str]:
        return self._value

    @property
    def is_set(self) -> bool:
        return self._value is not None

    def get_or_compute(self, compute: Callable[[], str]) -> str:
        """
        Return the cached value, computing and storing it first if unset.

        A failing compute() leaves the cell unset and propagates.
        """
        if self._value is None:
            value = compute()
            self._value = value
            logger.info("server_text_cached", length=len(value))
        return self._value
