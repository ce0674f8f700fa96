# Este archivo escribe y vuelve a leer el fichero de prueba en el sistema de ficheros compartido (EFS).

"""
Shared filesystem round trip.

Writes the configured text to the shared path and reads it back,
proving the mount is writable and readable from this task.
"""
from pathlib import Path  # Manejo moderno de rutas de archivos

from ..exceptions import SharedFileError  # Excepción personalizada para fallos de EFS
from .logging import get_logger  # Logger estructurado

logger = get_logger(__name__)


def write_then_read(path: Path, text: str) -> str:
    """
    Write text to a shared file, then read the same file back.

    Args:
        path: Path on the shared filesystem
        text: Text to write

    Returns:
        File contents as read back from disk

    Raises:
        SharedFileError: If either the write or the read fails
    """
    path = Path(path)
    try:
        path.write_bytes(text.encode("utf-8"))
        contents = path.read_bytes().decode("utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.error("efs_test_file_failed", efs_test_file=str(path))
        logger.error("efs_test_file_error", error=str(e))
        raise SharedFileError(
            f"Unable to write/read EFS test file: {path}",
            context={"efs_test_file": str(path), "error": str(e)}
        ) from e

    logger.info("efs_test_file_verified", efs_test_file=str(path), size=len(contents))
    return contents
