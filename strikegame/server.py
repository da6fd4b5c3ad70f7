"""Game server: plays rounds of the strike game against one client at a time."""

from __future__ import annotations

import random
import socket
import sys
from enum import IntEnum

from strikegame.net import AddressError, server_address
from strikegame.protocol import (
    GameMessage,
    MessageType,
    recv_message,
    send_message,
)

ACTION_COUNT = 5

_BEATS = {
    0: {2, 3},
    1: {0, 4},
    2: {1, 3},
    3: {1, 4},
    4: {0, 2},
}

_RESULT_TEXT = {
    1: "Vitória!",
    0: "Derrota!",
    -1: "Empate!",
}

_PROTOCOL_MODES = {"v4": "IPv4", "v6": "IPv6"}


class Outcome(IntEnum):
    """Result of a round, seen from the client's side."""

    DRAW = -1
    LOSS = 0
    WIN = 1


def determine_winner(client_action: int, server_action: int) -> Outcome:
    """Decide a round: WIN if the client's action beats the server's, DRAW on equal actions."""
    if client_action == server_action:
        return Outcome.DRAW
    if server_action in _BEATS.get(client_action, ()):
        return Outcome.WIN
    return Outcome.LOSS


def result_text(result: int) -> str:
    """Return the text shown to the client for a round result."""
    try:
        return _RESULT_TEXT[int(result)]
    except KeyError:
        raise ValueError(f"unknown round result: {result!r}") from None


def _play_round(conn: socket.socket, rng: random.Random) -> Outcome:
    """Play until a round is decided, re-asking on invalid actions and draws."""
    while True:
        print("Apresentando as opções para o cliente.")
        send_message(
            conn,
            GameMessage(MessageType.REQUEST, message="Escolha sua acao (0-4):"),
        )
        reply = recv_message(conn)
        action = reply.client_action
        print(f"Cliente escolheu {action}.")

        if not 0 <= action < ACTION_COUNT:
            print("Erro: opção inválida de jogada.")
            send_message(
                conn,
                GameMessage(
                    MessageType.ERROR,
                    message="Por favor, selecione um valor de 0 a 4.",
                ),
            )
            continue

        server_action = rng.randrange(ACTION_COUNT)
        print(f"Servidor escolheu aleatoriamente {server_action}.")

        outcome = determine_winner(action, server_action)
        send_message(
            conn,
            GameMessage(
                MessageType.RESULT,
                client_action=action,
                server_action=server_action,
                result=int(outcome),
                message=result_text(outcome),
            ),
        )

        if outcome is not Outcome.DRAW:
            return outcome
        print("Jogo empatado.")
        print("Solicitando ao cliente mais uma escolha.")


def _ask_play_again(conn: socket.socket) -> bool:
    """Ask whether the client wants another game until it answers 0 or 1."""
    while True:
        print("Perguntando novamente se o cliente deseja jogar novamente.")
        send_message(
            conn,
            GameMessage(
                MessageType.PLAY_AGAIN_REQUEST,
                message="Deseja jogar novamente? (1-Sim, 0-Nao)",
            ),
        )
        reply = recv_message(conn)
        if reply.client_action in (0, 1):
            again = reply.client_action == 1
            if again:
                print("Cliente deseja jogar novamente.")
            else:
                print("Cliente não deseja jogar novamente.")
                print("Enviando placar final.")
            return again

        print("Erro: resposta inválida para jogar novamente.")
        send_message(
            conn,
            GameMessage(
                MessageType.ERROR,
                message="Por favor, digite 1 para jogar novamente ou 0 para encerrar.",
            ),
        )


def serve_client(conn: socket.socket, rng: random.Random) -> tuple[int, int]:
    """Run a whole session on a connected socket and return (client_wins, server_wins).

    Raises ConnectionClosed or OSError if the client goes away mid-session.
    """
    client_wins = 0
    server_wins = 0
    while True:
        outcome = _play_round(conn, rng)
        if outcome is Outcome.WIN:
            client_wins += 1
        else:
            server_wins += 1
        print(f"Placar atualizado: Cliente {client_wins} x {server_wins} Servidor")

        if not _ask_play_again(conn):
            break

    send_message(
        conn,
        GameMessage(
            MessageType.END,
            client_wins=client_wins,
            server_wins=server_wins,
            message=(
                "Fim de jogo!\n"
                f"Placar final: Você {client_wins} x {server_wins} Servidor"
            ),
        ),
    )
    return client_wins, server_wins


def _usage(prog: str) -> int:
    print(f"uso: {prog} <v4|v6> <porta servidor>")
    print(f"exemplo: {prog} v4 51511")
    return 1


def main(argv: list[str] | None = None) -> int:
    """Start the game server: main(['v4', '51511'])."""
    prog = "server"
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) < 2:
        return _usage(prog)
    proto, port = args[0], args[1]
    try:
        family, address = server_address(proto, port)
    except AddressError:
        return _usage(prog)

    rng = random.Random()

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

        mode = _PROTOCOL_MODES.get(proto, "modo desconhecido")
        print(
            f"Servidor iniciado em modo {mode} na porta {port}. "
            "Aguardando conexão...",
            flush=True,
        )

        try:
            while True:
                try:
                    conn, _ = listener.accept()
                except OSError as exc:
                    print(f"accept: {exc}", file=sys.stderr)
                    return 1
                print("Cliente conectado.")
                try:
                    serve_client(conn, rng)
                except OSError as exc:
                    print(f"Cliente desconectou ou erro na comunicação: {exc}")
                    conn.close()
                    continue
                print("Encerrando conexão.")
                conn.close()
                print("Cliente desconectado.", flush=True)
        except KeyboardInterrupt:
            return 0


if __name__ == "__main__":
    sys.exit(main())