"""Threaded server that logs each client's first message and tells it its own address."""

from __future__ import annotations

import socket
import sys
import threading

from strikegame.net import AddressError, format_address, server_address

BUFFER_SIZE = 1024


def _family_of(address: tuple) -> int:
    return socket.AF_INET6 if len(address) == 4 else socket.AF_INET


def handle_client(conn: socket.socket, address: tuple) -> bytes:
    """Serve one connection and close it; return the bytes received (empty if none).

    Raises OSError if the reply cannot be sent.
    """
    with conn:
        description = format_address(_family_of(address), address)
        print(f"[log] connection from {description}")
        try:
            data = conn.recv(BUFFER_SIZE - 1)
        except OSError as exc:
            print(f"recv: {exc}", file=sys.stderr)
            return b""
        if not data:
            print(f"[log] client {description} disconnected (recv returned 0)")
            return b""
        text = data.split(b"\0", 1)[0].decode("utf-8", errors="replace")
        print(f"[msg] {description}, {len(data)} bytes: {text}")
        reply = f"remote endpoint: {description[:60]}\n".encode("utf-8") + b"\0"
        conn.sendall(reply)
        return data


def _serve_in_thread(conn: socket.socket, address: tuple) -> None:
    try:
        handle_client(conn, address)
    except OSError as exc:
        print(f"send: {exc}", file=sys.stderr)


def _usage(prog: str) -> int:
    print(f"usage: {prog} <v4|v6> <server port>")
    print(f"example: {prog} v4 51511")
    return 1


def main(argv: list[str] | None = None) -> int:
    """Start the threaded server: main(['v4', '51511'])."""
    prog = "server-mt"
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) < 2:
        return _usage(prog)
    try:
        family, address = server_address(args[0], args[1])
    except AddressError:
        return _usage(prog)

    try:
        listener = socket.socket(family, socket.SOCK_STREAM)
    except OSError as exc:
        print(f"socket: {exc}", file=sys.stderr)
        return 1

    with listener:
        stage = "setsockopt"
        try:
            listener.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            stage = "bind"
            listener.bind(address)
            stage = "listen"
            listener.listen(10)
        except OSError as exc:
            print(f"{stage}: {exc}", file=sys.stderr)
            return 1

        print(
            f"bound to {format_address(family, address)}, waiting connections",
            flush=True,
        )

        try:
            while True:
                try:
                    conn, client_address = listener.accept()
                except OSError as exc:
                    print(f"accept: {exc}", file=sys.stderr)
                    continue
                try:
                    threading.Thread(
                        target=_serve_in_thread,
                        args=(conn, client_address),
                        daemon=True,
                    ).start()
                except RuntimeError as exc:
                    print(f"thread start: {exc}", file=sys.stderr)
                    conn.close()
        except KeyboardInterrupt:
            return 0


if __name__ == "__main__":
    sys.exit(main())