# Este es el servidor HTTP principal: espera el retardo de arranque, escucha en 0.0.0.0:3000
# y responde a cualquier petición con el texto en caché.

"""
Example HTTP server.

Waits BOOT_DELAY_SEC seconds, binds 0.0.0.0:3000 and answers every
request (any method, any path) with 200 text/plain and the cached
server text. Errors while computing the text are fatal.
"""
import time  # Retardo de arranque
from http.server import HTTPServer, BaseHTTPRequestHandler  # Servidor HTTP de la librería estándar
from typing import Optional, Tuple  # Type hints

from .config.settings import Settings, get_settings  # Configuración del servidor
from .content import ResponseCache, resolve_server_text  # Resolución y caché del texto
from .utils.logging import setup_logging, get_logger  # Sistema de logging estructurado

logger = get_logger(__name__)

HOST = "0.0.0.0"
PORT = 3000


class ExampleRequestHandler(BaseHTTPRequestHandler):
    """Answers every request identically; the request itself is ignored."""

    server: "ExampleHTTPServer"

    def __getattr__(self, name: str):
        # Route do_GET, do_POST, do_ANYTHING... to the same response
        if name.startswith("do_"):
            return self._respond
        raise AttributeError(name)

    def _respond(self) -> None:
        text = self.server.cache.get_or_compute(
            lambda: resolve_server_text(self.server.settings)
        )
        body = (text + "\n").encode("utf-8")

        self.send_response(200)
        self.send_header("Content-Type", "text/plain")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        if self.command != "HEAD":
            self.wfile.write(body)

    def log_message(self, format, *args):
        logger.debug(
            "http_request",
            client=self.address_string(),
            message=format % args
        )


class ExampleHTTPServer(HTTPServer):
    """
    Single-threaded HTTP server owning the settings and the response cache.

    Any exception raised while handling a request closes the connection
    and propagates out of serve_forever(), ending the process.
    """

    allow_reuse_address = True

    def __init__(
        self,
        server_address: Tuple[str, int],
        settings: Settings,
        cache: Optional[ResponseCache] = None
    ):
        self.settings = settings
        self.cache = cache if cache is not None else ResponseCache()
        super().__init__(server_address, ExampleRequestHandler)

    @property
    def url(self) -> str:
        host, port = self.server_address[:2]
        return f"http://{host}:{port}/"

    def handle_error(self, request, client_address):
        logger.error("request_failed", client=client_address[0], exc_info=True)
        self.shutdown_request(request)
        raise


def create_server(
    settings: Settings,
    host: str = HOST,
    port: int = PORT,
    cache: Optional[ResponseCache] = None
) -> ExampleHTTPServer:
    """
    Run the boot delay, then bind the HTTP listener.

    Args:
        settings: Loaded server settings
        host: Bind address (default: 0.0.0.0)
        port: Bind port (default: 3000, 0 picks a free port)
        cache: Optional pre-built response cache

    Returns:
        Bound server, not yet serving
    """
    # Nothing is bound until the delay is over; connections are refused meanwhile
    logger.info(
        "boot_delay",
        delay_seconds=settings.boot_delay_sec,
        message=f"Delaying boot by {settings.boot_delay_sec} seconds"
    )
    time.sleep(settings.boot_delay_sec)

    httpd = ExampleHTTPServer((host, port), settings, cache)
    logger.info("server_running", url=httpd.url)
    return httpd


def serve(
    settings: Settings,
    host: str = HOST,
    port: int = PORT,
    cache: Optional[ResponseCache] = None
) -> None:
    """Create the server and serve until shutdown or a fatal request error."""
    httpd = create_server(settings, host, port, cache)
    try:
        httpd.serve_forever()
    finally:
        httpd.server_close()


def main():
    """
    Main entry point for running the example server.

    Can be invoked via:
    - python -m example_server
    - the example-server console script
    """
    settings = get_settings()

    setup_logging(
        level=settings.log_level,
        json_logs=settings.log_json,
        log_dir=settings.log_dir
    )

    logger.info(
        "server_initializing",
        boot_delay_sec=settings.boot_delay_sec,
        s3_test_file=settings.s3_test_file,
        efs_test_file=str(settings.efs_test_file) if settings.efs_test_file else None,
        server_text_set=settings.server_text is not None
    )

    try:
        serve(settings)
    except KeyboardInterrupt:
        logger.info("server_shutdown", reason="keyboard_interrupt")
    except Exception as e:
        logger.error("server_error", error=str(e))
        raise


if __name__ == "__main__":
    main()
