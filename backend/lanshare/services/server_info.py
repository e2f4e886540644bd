"""Reachable address of this server and its QR encoding."""
import logging
import socket

import segno

from lanshare.errors import EncodingFailure

logger = logging.getLogger(__name__)


def get_local_ip() -> str:
    """Primary LAN address, found by asking the OS which interface routes outward.

    Connecting a UDP socket sends no packets.
    """
    s = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    try:
        s.connect(("8.8.8.8", 80))
        return s.getsockname()[0]
    except OSError:
        return "127.0.0.1"
    finally:
        s.close()


def server_url(port: int, public_url: str = "") -> str:
    if public_url:
        return public_url.rstrip("/")
    return f"http://{get_local_ip()}:{port}"


def qr_data_url(url: str) -> str:
    """PNG data: URI of a QR code for `url`."""
    try:
        return segno.make_qr(url, error="m").png_data_uri(scale=6, border=2)
    except ValueError as e:  # includes segno.DataOverflowError
        raise EncodingFailure() from e


def print_terminal_qr(url: str) -> None:
    """Startup convenience: draw the QR code on the console."""
    try:
        segno.make_qr(url, error="m").terminal(compact=True)
    except (ValueError, OSError) as e:
        logger.warning(f"Could not print QR code: {e}")
