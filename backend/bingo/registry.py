import itertools
import logging
import threading
from typing import Dict, Optional

from bingo.commands import HostJoin, PlayerClaim, PlayerJoin, PlayerMark
from bingo.errors import (
    GameAlreadyEnded,
    GameNotFound,
    NameRequired,
    NameTaken,
    NoPlayers,
    NumberNotDrawn,
    Rejected,
)
from bingo.models import FREE, GameSession, Player, Winner, generate_game_code
from bingo.services.games.cards import generate_card
from bingo.services.games.draws import draw_number
from bingo.services.games.scoring import has_bingo


class SessionRegistry:
    """All live bingo games of one server plus the walk-up "active" pointer.

    Socket handlers run on several threads and auto-draw ticks arrive from
    background tasks, so every public operation holds ``_lock`` for its whole
    read-validate-mutate-broadcast sequence.
    """

    def __init__(self, broadcaster, scheduler=None, logger=None,
                 code_length=4, max_name_length=20):
        self.broadcaster = broadcaster
        self.scheduler = scheduler
        self.logger = logger or logging.getLogger(__name__)
        self.code_length = code_length
        self.max_name_length = max_name_length
        self.active_game_id: Optional[str] = None
        self._games: Dict[str, GameSession] = {}
        self._lock = threading.RLock()
        self._draw_tokens = itertools.count(1)

    def get(self, code: str) -> Optional[GameSession]:
        with self._lock:
            return self._games.get(code)

    def _require(self, code: str) -> GameSession:
        game = self._games.get(code)
        if game is None:
            raise GameNotFound()
        return game

    # ---- broadcasts ----

    def _emit_meta(self, game: GameSession) -> None:
        self.broadcaster.to_room('state:meta', game.meta(), room=game.id)

    def _emit_players(self, game: GameSession) -> None:
        self.broadcaster.to_room('state:players', game.players_list(), room=game.id)

    def _set_active_game(self, code: Optional[str]) -> None:
        self.active_game_id = code
        self.broadcaster.to_all('game:available', {'gameId': code})

    def announce_active_game(self, sid: str) -> None:
        with self._lock:
            self.broadcaster.to_one('game:available', {'gameId': self.active_game_id}, sid=sid)

    # ---- host commands ----

    def create(self, host_sid: str) -> dict:
        with self._lock:
            code = generate_game_code(self._games, self.code_length)
            game = GameSession(id=code, host_sid=host_sid)
            self._games[code] = game
            self.broadcaster.join(host_sid, code)
            self.logger.info(f"[game-create] game={code} host={host_sid}")
            self._emit_meta(game)
            self._emit_players(game)
            self._set_active_game(code)
            return {'gameId': code}

    def host_join(self, host_sid: str, command: HostJoin) -> dict:
        with self._lock:
            game = self._require(command.game_id)
            game.host_sid = host_sid
            self.broadcaster.join(host_sid, game.id)
            self.logger.info(f"[host-join] game={game.id} host={host_sid}")
            self._emit_meta(game)
            self._emit_players(game)
            if not game.closed:
                self._set_active_game(game.id)
            return {'gameId': game.id}

    def start(self, command: HostJoin) -> dict:
        with self._lock:
            game = self._require(command.game_id)
            if game.closed:
                raise GameAlreadyEnded()
            if not game.players:
                raise NoPlayers()
            game.started = True
            # A fresh token retires any run left over from an earlier start
            token = next(self._draw_tokens)
            game.draw_token = token
            self.logger.info(f"[game-start] game={game.id} players={len(game.players)} token={token}")
            self._emit_meta(game)
            if self.scheduler is not None:
                self.scheduler.schedule(self, game.id, token)
            return {}

    def stop(self, command: HostJoin) -> dict:
        with self._lock:
            game = self._require(command.game_id)
            self._stop_auto_draw(game)
            self.logger.info(f"[game-stop] game={game.id} drawn={len(game.drawn)}")
            return {}

    def reset(self, command: HostJoin) -> dict:
        with self._lock:
            current = self._require(command.game_id)
            current.draw_token = None
            fresh = GameSession(id=current.id, host_sid=current.host_sid)
            self._games[fresh.id] = fresh
            self.logger.info(f"[game-reset] game={fresh.id}")
            self.broadcaster.to_room('game:reset', room=fresh.id)
            self._emit_meta(fresh)
            self._emit_players(fresh)
            self._set_active_game(fresh.id)
            return {}

    # ---- auto-draw ----

    def auto_draw_tick(self, code: str, token: int) -> bool:
        """Draw once for the run identified by ``token``.

        Returns False when the run is over: the game was stopped, restarted,
        reset, closed, or every number has been drawn.
        """
        with self._lock:
            game = self._games.get(code)
            if game is None or game.draw_token != token:
                return False
            if not game.started or game.closed:
                return False
            if self._draw(game) is None:
                self.logger.info(f"[draw-exhausted] game={game.id}")
                self._stop_auto_draw(game)
                return False
            return True

    def _draw(self, game: GameSession) -> Optional[int]:
        number = draw_number(game)
        if number is None:
            return None
        self.logger.info(f"[draw] game={game.id} number={number} count={len(game.drawn)}")
        self.broadcaster.to_room('number:drawn', {'number': number, 'drawn': list(game.drawn)}, room=game.id)
        self._emit_meta(game)
        return number

    def _stop_auto_draw(self, game: GameSession) -> None:
        game.draw_token = None
        game.started = False
        self._emit_meta(game)

    def _close_game(self, game: GameSession, player: Player) -> None:
        game.closed = True
        game.winner = Winner(id=player.id, name=player.name)
        self.logger.info(f"[winner] game={game.id} player={player.id} name={player.name}")
        self._stop_auto_draw(game)
        self.broadcaster.to_room('game:winner', game.winner.to_dict(), room=game.id)
        self._emit_meta(game)
        if self.active_game_id == game.id:
            self._set_active_game(None)

    # ---- player commands ----

    def player_join(self, sid: str, command: PlayerJoin) -> dict:
        with self._lock:
            code = command.game_id or self.active_game_id
            game = self._games.get(code) if code else None
            if game is None:
                raise GameNotFound('Waiting for host to start a game')
            if game.closed:
                raise GameAlreadyEnded()

            name = command.name.strip()[:self.max_name_length]
            if not name:
                raise NameRequired()
            if game.find_player_by_name(name) is not None:
                raise NameTaken()

            player = Player(id=sid, name=name, card=generate_card())
            game.players[sid] = player
            self.broadcaster.join(sid, game.id)
            self.logger.info(f"[player-join] game={game.id} player={sid} name={name}")

            payload = {'card': player.card.to_dict()}
            payload.update(game.snapshot())
            self._emit_players(game)
            self._emit_meta(game)
            return payload

    def _require_eligible_player(self, sid: str, code: str):
        game = self._games.get(code)
        if game is None or game.closed or not game.started:
            raise Rejected()
        player = game.players.get(sid)
        if player is None or player.disqualified:
            raise Rejected()
        return game, player

    def player_mark(self, sid: str, command: PlayerMark) -> dict:
        with self._lock:
            game, player = self._require_eligible_player(sid, command.game_id)
            card = player.card
            value = card.value_at(command.row, command.col)
            if value == FREE:
                return {}
            if value not in game.drawn:
                raise NumberNotDrawn()
            if card.marked[command.row][command.col]:
                return {}

            card.marked[command.row][command.col] = True
            if has_bingo(card.marked) and not game.closed:
                self._close_game(game, player)
            self._emit_players(game)
            self._emit_meta(game)
            return {
                'marked': True,
                'closed': game.closed,
                'winner': game.winner.to_dict() if game.winner else None,
            }

    def player_claim(self, sid: str, command: PlayerClaim) -> dict:
        with self._lock:
            game, player = self._require_eligible_player(sid, command.game_id)
            if has_bingo(player.card.marked):
                if not game.closed:
                    self._close_game(game, player)
                return {'valid': True, 'winner': game.winner.to_dict()}

            player.disqualified = True
            self.logger.info(f"[false-claim] game={game.id} player={sid} name={player.name}")
            self._emit_players(game)
            return {'valid': False, 'disqualified': True}

    def disconnect(self, sid: str) -> None:
        with self._lock:
            for game in self._games.values():
                if game.players.pop(sid, None) is not None:
                    self.logger.info(f"[player-leave] game={game.id} player={sid}")
                    self._emit_players(game)
