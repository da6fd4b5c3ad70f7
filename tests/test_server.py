import socket
import threading

import pytest

from strikegame.protocol import (
    ConnectionClosed,
    GameMessage,
    MessageType,
    recv_message,
    send_message,
)
from strikegame.server import (
    Outcome,
    determine_winner,
    main,
    result_text,
    serve_client,
)


class _ScriptedRng:
    def __init__(self, values):
        self._values = iter(values)

    def randrange(self, stop):
        value = next(self._values)
        assert 0 <= value < stop
        return value


def _start_session(rng):
    server_sock, client_sock = socket.socketpair()
    server_sock.settimeout(5)
    client_sock.settimeout(5)
    outcome = {}

    def target():
        try:
            outcome["score"] = serve_client(server_sock, rng)
        except Exception as exc:  # recorded for the test to inspect
            outcome["error"] = exc
        finally:
            server_sock.close()

    thread = threading.Thread(target=target, daemon=True)
    thread.start()
    return client_sock, thread, outcome


def _respond(sock, kind, value):
    send_message(sock, GameMessage(kind, client_action=value))


def _finish(sock, thread):
    thread.join(5)
    sock.close()
    assert not thread.is_alive()


@pytest.mark.parametrize("action", range(5))
def test_same_actions_draw(action):
    assert determine_winner(action, action) == -1
    assert determine_winner(action, action) is Outcome.DRAW


def test_pinned_pairs_from_rules():
    assert determine_winner(0, 2) == 1
    assert determine_winner(2, 0) == 0
    assert determine_winner(1, 4) == 1
    assert determine_winner(4, 1) == 0


@pytest.mark.parametrize("a", range(5))
@pytest.mark.parametrize("b", range(5))
def test_distinct_actions_have_exactly_one_winner(a, b):
    if a == b:
        assert determine_winner(a, b) is Outcome.DRAW
    else:
        assert {determine_winner(a, b), determine_winner(b, a)} == {
            Outcome.WIN,
            Outcome.LOSS,
        }


@pytest.mark.parametrize("action", range(5))
def test_each_action_beats_two_others(action):
    wins = [b for b in range(5) if determine_winner(action, b) is Outcome.WIN]
    assert len(wins) == 2


def test_result_text_values():
    assert result_text(1) == "Vitória!"
    assert result_text(0) == "Derrota!"
    assert result_text(-1) == "Empate!"
    assert result_text(Outcome.DRAW) == "Empate!"


def test_result_text_rejects_unknown():
    with pytest.raises(ValueError):
        result_text(7)


def test_single_won_game_session():
    client, thread, outcome = _start_session(_ScriptedRng([2]))

    request = recv_message(client)
    assert request.type is MessageType.REQUEST
    assert request.message == "Escolha sua acao (0-4):"
    _respond(client, MessageType.RESPONSE, 0)

    result = recv_message(client)
    assert result.type is MessageType.RESULT
    assert (result.client_action, result.server_action) == (0, 2)
    assert result.result == 1
    assert result.message == "Vitória!"

    ask = recv_message(client)
    assert ask.type is MessageType.PLAY_AGAIN_REQUEST
    assert ask.message == "Deseja jogar novamente? (1-Sim, 0-Nao)"
    _respond(client, MessageType.PLAY_AGAIN_RESPONSE, 0)

    end = recv_message(client)
    assert end.type is MessageType.END
    assert end.message == "Fim de jogo!\nPlacar final: Você 1 x 0 Servidor"
    _finish(client, thread)
    assert outcome["score"] == (end.client_wins, end.server_wins)


def test_invalid_action_gets_error_then_new_request():
    client, thread, outcome = _start_session(_ScriptedRng([0]))

    assert recv_message(client).type is MessageType.REQUEST
    _respond(client, MessageType.RESPONSE, 9)
    error = recv_message(client)
    assert error.type is MessageType.ERROR
    assert error.message == "Por favor, selecione um valor de 0 a 4."
    assert recv_message(client).type is MessageType.REQUEST

    _respond(client, MessageType.RESPONSE, 1)
    result = recv_message(client)
    assert result.result == determine_winner(1, 0)
    assert recv_message(client).type is MessageType.PLAY_AGAIN_REQUEST
    _respond(client, MessageType.PLAY_AGAIN_RESPONSE, 0)
    end = recv_message(client)
    _finish(client, thread)
    assert outcome["score"] == (end.client_wins, end.server_wins)
    assert end.client_wins == 1


def test_draw_repeats_the_round():
    client, thread, outcome = _start_session(_ScriptedRng([3, 2]))

    assert recv_message(client).type is MessageType.REQUEST
    _respond(client, MessageType.RESPONSE, 3)
    draw = recv_message(client)
    assert draw.result == -1
    assert draw.message == "Empate!"

    assert recv_message(client).type is MessageType.REQUEST
    _respond(client, MessageType.RESPONSE, 3)
    loss = recv_message(client)
    assert loss.result == determine_winner(3, 2)
    assert loss.message == "Derrota!"

    assert recv_message(client).type is MessageType.PLAY_AGAIN_REQUEST
    _respond(client, MessageType.PLAY_AGAIN_RESPONSE, 0)
    end = recv_message(client)
    _finish(client, thread)
    assert end.server_wins == 1
    assert outcome["score"] == (0, 1)


def test_invalid_play_again_answer_is_reasked():
    client, thread, outcome = _start_session(_ScriptedRng([4, 1]))

    recv_message(client)
    _respond(client, MessageType.RESPONSE, 1)
    recv_message(client)
    assert recv_message(client).type is MessageType.PLAY_AGAIN_REQUEST
    _respond(client, MessageType.PLAY_AGAIN_RESPONSE, 5)
    error = recv_message(client)
    assert error.type is MessageType.ERROR
    assert error.message == (
        "Por favor, digite 1 para jogar novamente ou 0 para encerrar."
    )
    assert recv_message(client).type is MessageType.PLAY_AGAIN_REQUEST
    _respond(client, MessageType.PLAY_AGAIN_RESPONSE, 1)

    assert recv_message(client).type is MessageType.REQUEST
    _respond(client, MessageType.RESPONSE, 4)
    second = recv_message(client)
    assert second.server_action == 1
    recv_message(client)
    _respond(client, MessageType.PLAY_AGAIN_RESPONSE, 0)
    end = recv_message(client)
    _finish(client, thread)
    assert end.client_wins + end.server_wins == 2
    assert outcome["score"] == (end.client_wins, end.server_wins)


def test_disconnect_raises_connection_closed():
    client, thread, outcome = _start_session(_ScriptedRng([]))
    assert recv_message(client).type is MessageType.REQUEST
    client.close()
    thread.join(5)
    assert isinstance(outcome.get("error"), ConnectionClosed)
    assert "score" not in outcome


def test_main_without_arguments_prints_usage(capsys):
    assert main([]) == 1
    out = capsys.readouterr().out
    assert out.startswith("uso: ")
    assert "<v4|v6> <porta servidor>" in out


def test_main_with_unknown_protocol_prints_usage(capsys):
    assert main(["v5", "51511"]) == 1
    assert "exemplo:" in capsys.readouterr().out


def test_main_with_bad_port_prints_usage(capsys):
    assert main(["v4", "0"]) == 1
    assert "uso:" in capsys.readouterr().out