"""
Server Bootstrap

Binds the listening socket, moving to the next port while the requested one is
in use, and serves the application with uvicorn.
"""

import errno
import socket

import uvicorn

from payment_proxy.config import get_settings
from payment_proxy.utils.logging_config import get_logger, setup_logging

logger = get_logger(__name__)


def bind_socket(host: str, port: int, max_attempts: int = 10) -> socket.socket:
    """
    Bind a listening TCP socket.

    Args:
        host: Interface to bind
        port: First port to try
        max_attempts: Number of consecutive ports to try

    Returns:
        Bound, listening socket

    Raises:
        OSError: If no port could be bound, or on any error other than
            the port being in use
    """
    family = socket.AF_INET6 if ":" in host else socket.AF_INET

    for attempt in range(max_attempts):
        candidate = port + attempt
        sock = socket.socket(family, socket.SOCK_STREAM)
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        try:
            sock.bind((host, candidate))
            sock.listen(2048)
        except OSError as e:
            sock.close()
            if e.errno == errno.EADDRINUSE and attempt + 1 < max_attempts:
                logger.warning(
                    f"Port {candidate} is busy, trying with port {candidate + 1}",
                    extra={"port": candidate},
                )
                continue
            logger.error(f"Server error: {e}", extra={"host": host, "port": candidate})
            raise

        return sock

    raise OSError(errno.EADDRINUSE, f"No free port in {port}-{port + max_attempts - 1}")


def main() -> None:
    settings = get_settings()
    setup_logging(log_level=settings.log_level)

    sock = bind_socket(settings.host, settings.port, settings.port_retry_attempts)
    bound_host, bound_port = sock.getsockname()[:2]
    logger.info(f"Server running at http://localhost:{bound_port}", extra={"host": bound_host})

    config = uvicorn.Config(
        "payment_proxy.main:app",
        log_level=settings.log_level.lower(),
    )
    server = uvicorn.Server(config)
    server.run(sockets=[sock])


if __name__ == "__main__":
    main()
