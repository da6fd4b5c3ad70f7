"""Interactive game client: answers the server's prompts with choices typed by the player."""

from __future__ import annotations

import re
import socket
import sys
from typing import TextIO

from strikegame.net import AddressError, parse_address
from strikegame.protocol import (
    ConnectionClosed,
    GameMessage,
    MessageType,
    action_name,
    recv_message,
    send_message,
)

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")

INVALID_CHOICE = -1


def read_choice(stream: TextIO) -> int:
    """Read one line and return the integer it starts with, or -1 if it has none.

    Blank lines are skipped; end of input counts as an invalid choice.
    """
    for line in iter(stream.readline, ""):
        if not line.strip():
            continue
        match = _LEADING_INT.match(line)
        return int(match.group(1)) if match else INVALID_CHOICE
    return INVALID_CHOICE


def _show_action_menu(output: TextIO) -> None:
    print("\nEscolha sua jogada:", file=output)
    for action in range(5):
        print(f"{action} - {action_name(action)}", file=output)


def _show_play_again_menu(output: TextIO) -> None:
    print("\nDeseja jogar novamente?", file=output)
    print("1 - Sim", file=output)
    print("0 - Não", file=output)


def run_client(sock: socket.socket, input_stream: TextIO, output: TextIO) -> int:
    """Drive a game session over a connected socket and return an exit status.

    Raises OSError if a reply cannot be sent.
    """
    while True:
        try:
            received = recv_message(sock)
        except ConnectionClosed:
            print("Servidor encerrou a conexao.", file=output)
            return 0

        kind = received.type
        if kind == MessageType.REQUEST:
            _show_action_menu(output)
            output.flush()
            choice = read_choice(input_stream)
            send_message(
                sock, GameMessage(MessageType.RESPONSE, client_action=choice)
            )
        elif kind == MessageType.RESULT:
            print(
                f"\nVocê escolheu: {action_name(received.client_action)}",
                file=output,
            )
            print(
                f"Servidor escolheu: {action_name(received.server_action)}",
                file=output,
            )
            print(f"Resultado: {received.message}", file=output)
        elif kind == MessageType.PLAY_AGAIN_REQUEST:
            _show_play_again_menu(output)
            output.flush()
            choice = read_choice(input_stream)
            send_message(
                sock,
                GameMessage(MessageType.PLAY_AGAIN_RESPONSE, client_action=choice),
            )
        elif kind == MessageType.ERROR:
            print(f"\n{received.message}", file=output)
        elif kind == MessageType.END:
            print(f"\n{received.message}", file=output)
            print("Obrigado por jogar!", file=output)
            return 0
        else:
            print(
                "Mensagem desconhecida ou inesperada do servidor: "
                f"tipo {int(kind)}",
                file=output,
            )


def _usage(prog: str) -> int:
    print(f"uso: {prog} <IP servidor> <porta servidor>")
    print(f"exemplo: {prog} 127.0.0.1 51511")
    return 1


def main(argv: list[str] | None = None) -> int:
    """Connect to a game server: main(['127.0.0.1', '51511'])."""
    prog = "client"
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) < 2:
        return _usage(prog)
    try:
        family, address = parse_address(args[0], args[1])
    except AddressError:
        return _usage(prog)

    try:
        sock = socket.socket(family, socket.SOCK_STREAM)
    except OSError as exc:
        print(f"socket: {exc}", file=sys.stderr)
        return 1

    with sock:
        try:
            sock.connect(address)
        except OSError as exc:
            print(f"connect: {exc}", file=sys.stderr)
            return 1
        print("Conectado ao servidor.")
        try:
            return run_client(sock, sys.stdin, sys.stdout)
        except OSError as exc:
            print(f"send: {exc}", file=sys.stderr)
            return 1


if __name__ == "__main__":
    sys.exit(main())