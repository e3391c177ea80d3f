# Este es el servidor HTTP principal: registra el único handler (GET /) que envía la imagen
# configurada y controla el ciclo de vida del socket de escucha.

"""
Logo Server.

Serves one static image on "/" and nothing else. The server is an explicit
object owning its listening socket, so it can be started and stopped
repeatedly within one process.
"""
import argparse  # Parseo de flags de línea de comandos
import contextlib  # suppress para opciones de socket opcionales
import shutil  # Copia en streaming del archivo al socket
import socket  # Familias de direcciones IPv4/IPv6
import sys  # Acceso a argv
import threading  # Hilo de fondo para serve_forever
from enum import Enum  # Crear enumeraciones con valores fijos
from http import HTTPStatus  # Códigos de estado HTTP
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer  # Servidor HTTP de la librería estándar
from pathlib import Path  # Manejo moderno de rutas de archivos
from typing import List, Optional  # Type hints para listas y valores opcionales
from urllib.parse import urlsplit  # Separar la ruta del query string

from pydantic import ValidationError as PydanticValidationError  # Errores de validación de Settings

from .config.settings import Settings  # Configuración desde entorno y flags
from .exceptions import (  # Excepciones personalizadas
    ConfigurationError,
    ImageNotFoundError,
    RequestFailure,
    ServerStateError,
    StartupError,
)
from .utils.files import guess_content_type, open_image  # Acceso al archivo de imagen
from .utils.logging import get_logger, setup_logging  # Sistema de logging estructurado

logger = get_logger(__name__)

ROOT_PATH = "/"


class ServerState(str, Enum):
    """Server lifecycle states."""
    CREATED = "created"
    LISTENING = "listening"
    STOPPED = "stopped"


class ImageRequestHandler(BaseHTTPRequestHandler):
    """Answers GET and HEAD on "/" with the configured image."""

    server_version = "LogoServer"

    def do_GET(self) -> None:  # noqa: N802 - http.server API uses camelcase
        self._send_image(include_body=True)

    def do_HEAD(self) -> None:  # noqa: N802
        self._send_image(include_body=False)

    def _send_image(self, include_body: bool) -> None:
        if urlsplit(self.path).path != ROOT_PATH:
            self.send_error(HTTPStatus.NOT_FOUND)
            return

        image_path = self.server.image_path

        try:
            fh, size = open_image(image_path)
        except RequestFailure as e:
            event = "image_not_found" if isinstance(e, ImageNotFoundError) else "image_read_failed"
            logger.warning(event, status=e.status_code, **e.context)
            self.send_error(e.status_code)
            return

        with fh:
            self.send_response(HTTPStatus.OK)
            self.send_header("Content-Type", guess_content_type(image_path))
            self.send_header("Content-Length", str(size))
            self.end_headers()

            if not include_body:
                return

            try:
                shutil.copyfileobj(fh, self.wfile)
            except (BrokenPipeError, ConnectionResetError):
                logger.debug("client_disconnected", client=self.address_string())

    def log_message(self, format: str, *args) -> None:  # noqa: A002 - keep default signature
        logger.info("http_request", client=self.address_string(), message=format % args)


class ImageHTTPServer(ThreadingHTTPServer):
    """Threading HTTP server that knows which image to serve."""

    daemon_threads = True
    # A second server on the same port must fail to bind
    allow_reuse_port = False

    def __init__(self, server_address, image_path: Path):
        self.image_path = image_path
        # IPv6 literals (and "::") need an AF_INET6 socket
        if ":" in server_address[0]:
            self.address_family = socket.AF_INET6
        super().__init__(server_address, ImageRequestHandler)

    def server_bind(self) -> None:
        # "::" accepts IPv4 clients as well
        if self.address_family == socket.AF_INET6 and self.server_address[0] == "::":
            with contextlib.suppress(AttributeError, OSError):
                self.socket.setsockopt(socket.IPPROTO_IPV6, socket.IPV6_V6ONLY, 0)
        super().server_bind()


class StaticImageServer:
    """
    Single-route HTTP server for a static image.

    Lifecycle: created -> listening -> stopped. A stopped server
    cannot be restarted; build a new one instead.
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self.state = ServerState.CREATED
        self._httpd: Optional[ImageHTTPServer] = None
        self._thread: Optional[threading.Thread] = None

    @property
    def port(self) -> int:
        """Bound port once listening (resolves port 0), configured port otherwise."""
        if self._httpd is not None:
            return self._httpd.server_address[1]
        return self.settings.port

    @property
    def url(self) -> str:
        host = self.settings.host
        if host in ("", "0.0.0.0", "::"):
            host = "localhost"
        elif ":" in host:
            host = f"[{host}]"
        return f"http://{host}:{self.port}"

    def start(self) -> None:
        """
        Bind the listening socket and start serving on a background thread.

        Raises:
            ServerStateError: If the server was already started
            StartupError: If the socket cannot be bound
        """
        if self.state is not ServerState.CREATED:
            raise ServerStateError(
                f"Cannot start server in state {self.state.value}",
                context={"state": self.state.value}
            )

        host, port = self.settings.host, self.settings.port
        image_path = self.settings.image_path

        try:
            self._httpd = ImageHTTPServer((host, port), image_path)
        except OSError as e:
            raise StartupError(
                f"Cannot listen on {host}:{port}: {e.strerror or e}",
                context={"host": host, "port": port, "errno": e.errno}
            ) from e

        if not image_path.is_file():
            logger.warning("image_missing_at_startup", path=str(image_path))

        self._thread = threading.Thread(
            target=self._httpd.serve_forever,
            name="logo-server",
            daemon=True
        )
        self._thread.start()
        self.state = ServerState.LISTENING

        logger.info("server_listening", url=self.url, image_path=str(image_path))
        print(f"Server running on {self.url}", flush=True)

    def wait(self) -> None:
        """Block until the serve loop exits."""
        if self.state is ServerState.CREATED:
            raise ServerStateError("Server has not been started", context={"state": self.state.value})
        self._thread.join()

    def stop(self) -> None:
        """Stop serving, close the socket and release the port. Idempotent."""
        if self.state is not ServerState.LISTENING:
            return

        self._httpd.shutdown()
        self._httpd.server_close()
        self._thread.join()
        self.state = ServerState.STOPPED

        logger.info("server_stopped", port=self.port)

    def __enter__(self) -> "StaticImageServer":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="logo-server",
        description="Serve a single static image on /."
    )
    parser.add_argument("--host", help="Bind address (default 0.0.0.0)")
    parser.add_argument("--port", type=int, help="Port to listen on (default 3000, or $PORT)")
    parser.add_argument("--image-directory", type=Path, help="Directory holding the image")
    parser.add_argument("--image-file-name", help="Image file name inside the directory")
    return parser


def load_settings(argv: Optional[List[str]] = None) -> Settings:
    """
    Build settings from the environment, with command-line flags taking precedence.

    Args:
        argv: Argument list (default: sys.argv[1:])

    Returns:
        Validated Settings

    Raises:
        ConfigurationError: If the resulting settings are invalid
    """
    args = build_parser().parse_args(sys.argv[1:] if argv is None else argv)
    overrides = {key: value for key, value in vars(args).items() if value is not None}

    try:
        return Settings(**overrides)
    except PydanticValidationError as e:
        raise ConfigurationError(
            "Invalid configuration",
            context={"errors": [f"{'.'.join(map(str, err['loc']))}: {err['msg']}" for err in e.errors()]}
        ) from e


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point: start the server and block until interrupted.

    Returns:
        Process exit code (0 clean shutdown, 1 startup failure, 2 bad configuration)
    """
    try:
        settings = load_settings(argv)
    except ConfigurationError as e:
        setup_logging()
        logger.error("invalid_configuration", **e.context)
        return 2

    setup_logging(
        level=settings.log_level,
        json_logs=settings.log_json,
        log_dir=settings.log_dir
    )

    server = StaticImageServer(settings)

    try:
        server.start()
    except StartupError as e:
        logger.error("server_startup_failed", error=str(e), **e.context)
        return 1

    try:
        server.wait()
    except KeyboardInterrupt:
        logger.info("server_shutdown", reason="keyboard_interrupt")
    finally:
        server.stop()

    return 0


if __name__ == "__main__":
    sys.exit(main())
