# strikegame

A small two-player strike game played over TCP. The server waits for
a player. In each round it asks the player for one of five actions and
picks its own action at random. It then reports the result and keeps a
running score until the player decides to stop.

## Actions

| Number | Action           |
|--------|------------------|
| 0      | Nuclear Attack   |
| 1      | Intercept Attack |
| 2      | Cyber Attack     |
| 3      | Drone Strike     |
| 4      | Bio Attack       |

Each action beats two of the others.

- When both sides choose the same action, the round is a draw and is replayed.
- When the player sends a value outside 0–4, the server replies with an error and asks again.

## Installing

```
pip install .
```

## Playing

Start a server. The first argument selects IPv4 or IPv6 and the second gives the port:

```
strikegame-server v4 51511
```

Connect a client by giving the server's address and port:

```
strikegame-client 127.0.0.1 51511
```

The client shows the menu of actions and reads a number from standard input.

After each decided round, you are asked whether to play again:

- Enter `1` to play another round.
- Enter `0` to end the game and get the final score.

## Echo server

A threaded diagnostic server is also included. It accepts any number of clients at once. From each client it reads one message, logs it, and replies with the client's remote endpoint:

```
strikegame-echo v6 51511
```

## Library use

The modules can also be used directly:

- `strikegame.protocol` provides the following:
  - `GameMessage`, the fixed-size message record.
  - `MessageType`.
  - `action_name`.
  - `send_message` and `recv_message`.
- `strikegame.server` provides the following:
  - `determine_winner`.
  - `result_text`.
  - `serve_client`, which plays a whole session on a connected socket with a given random generator.
- `strikegame.client` provides `run_client` for driving a session from any input and output streams.
- `strikegame.net` provides `parse_address`, `server_address` and `format_address`. These raise `AddressError` on bad input.

## Running the tests

```
pip install .[test]
pytest
```