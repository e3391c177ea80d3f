# Este archivo resuelve la ruta de la imagen, detecta su tipo MIME y la abre para lectura.

"""
Image file access for the static image server.

The image is opened fresh on every request; nothing is cached.
"""
import errno  # Códigos de error del sistema operativo
import mimetypes  # Detección del Content-Type según la extensión
import os  # fstat sobre el descriptor abierto
from pathlib import Path  # Manejo moderno de rutas de archivos
from typing import BinaryIO, Tuple  # Type hints para archivos binarios y tuplas

from ..exceptions import ImageNotFoundError, ImageReadError  # Excepciones por petición

DEFAULT_CONTENT_TYPE = "application/octet-stream"

# Errores que significan "no existe" en lugar de "no se puede leer"
_NOT_FOUND_ERRNOS = {errno.ENOENT, errno.ENOTDIR, errno.ENAMETOOLONG}


def resolve_image_path(directory: Path, file_name: str) -> Path:
    """Join directory and file name into an absolute path."""
    return (Path(directory) / file_name).resolve()


def guess_content_type(path: Path) -> str:
    """
    Infer the Content-Type of a file from its extension.

    Args:
        path: File path (only the suffix is inspected)

    Returns:
        MIME type such as "image/png", or application/octet-stream if unknown
    """
    content_type, _ = mimetypes.guess_type(str(path))
    return content_type or DEFAULT_CONTENT_TYPE


def open_image(path: Path) -> Tuple[BinaryIO, int]:
    """
    Open the image for reading and report its size.

    The size comes from the open descriptor so it matches the bytes
    that will be streamed even if the file is replaced concurrently.

    Args:
        path: Absolute image path

    Returns:
        Tuple of (binary file object, size in bytes). Caller closes the file.

    Raises:
        ImageNotFoundError: If the file (or a parent directory) does not exist
        ImageReadError: If the file exists but cannot be read
    """
    try:
        fh = open(path, "rb")
    except OSError as e:
        context = {"path": str(path), "errno": e.errno, "error": e.strerror}
        if e.errno in _NOT_FOUND_ERRNOS:
            raise ImageNotFoundError(f"Image not found: {path}", context=context) from e
        raise ImageReadError(f"Cannot read image: {path}", context=context) from e

    try:
        size = os.fstat(fh.fileno()).st_size
    except OSError as e:
        fh.close()
        raise ImageReadError(
            f"Cannot stat image: {path}",
            context={"path": str(path), "errno": e.errno, "error": e.strerror}
        ) from e

    return fh, size
