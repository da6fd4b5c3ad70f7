"""Wire format of the game messages exchanged between client and server."""

from __future__ import annotations

import socket
import struct
from dataclasses import dataclass
from enum import IntEnum

MESSAGE_TEXT_SIZE = 256

_LAYOUT = struct.Struct(f"<6i{MESSAGE_TEXT_SIZE}s")
MESSAGE_SIZE = _LAYOUT.size

_ACTION_NAMES = {
    0: "Nuclear Attack",
    1: "Intercept Attack",
    2: "Cyber Attack",
    3: "Drone Strike",
    4: "Bio Attack",
}


class MessageType(IntEnum):
    """Kinds of message in a game session."""

    REQUEST = 0
    RESPONSE = 1
    RESULT = 2
    PLAY_AGAIN_REQUEST = 3
    PLAY_AGAIN_RESPONSE = 4
    ERROR = 5
    END = 6


class ConnectionClosed(ConnectionError):
    """The peer closed the connection before a whole message arrived."""


@dataclass
class GameMessage:
    """One fixed-size game message."""

    type: MessageType | int
    client_action: int = 0
    server_action: int = 0
    result: int = 0
    client_wins: int = 0
    server_wins: int = 0
    message: str = ""

    def pack(self) -> bytes:
        """Encode the message into its fixed-size wire form."""
        text = self.message.encode("utf-8")
        if len(text) >= MESSAGE_TEXT_SIZE:
            raise ValueError(
                f"message text is {len(text)} bytes; at most "
                f"{MESSAGE_TEXT_SIZE - 1} fit"
            )
        return _LAYOUT.pack(
            int(self.type),
            self.client_action,
            self.server_action,
            self.result,
            self.client_wins,
            self.server_wins,
            text,
        )

    @classmethod
    def unpack(cls, data: bytes) -> GameMessage:
        """Decode a message from exactly MESSAGE_SIZE bytes."""
        if len(data) != MESSAGE_SIZE:
            raise ValueError(
                f"a message is {MESSAGE_SIZE} bytes, got {len(data)}"
            )
        raw_type, client, server, result, cwins, swins, text = _LAYOUT.unpack(data)
        try:
            kind: MessageType | int = MessageType(raw_type)
        except ValueError:
            kind = raw_type
        message = text.split(b"\0", 1)[0].decode("utf-8", errors="replace")
        return cls(kind, client, server, result, cwins, swins, message)


def action_name(action: int) -> str:
    """Return the display name of an action number."""
    return _ACTION_NAMES.get(action, "Desconhecida")


def send_message(sock: socket.socket, message: GameMessage) -> None:
    """Send one whole message over a stream socket."""
    sock.sendall(message.pack())


def recv_message(sock: socket.socket) -> GameMessage:
    """Receive one whole message, raising ConnectionClosed if the peer hangs up."""
    chunks = bytearray()
    while len(chunks) < MESSAGE_SIZE:
        chunk = sock.recv(MESSAGE_SIZE - len(chunks))
        if not chunk:
            raise ConnectionClosed(
                f"connection closed after {len(chunks)} of {MESSAGE_SIZE} bytes"
            )
        chunks.extend(chunk)
    return GameMessage.unpack(bytes(chunks))