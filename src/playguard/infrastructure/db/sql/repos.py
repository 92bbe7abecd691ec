from typing import Optional

from sqlalchemy import text

from playguard.domain.models.session import PlayerSession
from playguard.domain.repositories import PlayerSessionRepository
from .connection import SessionLocal


def _row_to_session(row) -> PlayerSession:
    last_game_at = getattr(row, "last_game_at", None)
    welcome_shown_on = getattr(row, "welcome_shown_on", None)
    return PlayerSession(
        player_id=str(row.player_id),
        last_game_at=int(last_game_at) if last_game_at is not None else None,
        welcome_shown_on=str(welcome_shown_on) if welcome_shown_on else None,
    )


class SqlPlayerSessionRepository(PlayerSessionRepository):
    def get(self, player_id: str) -> Optional[PlayerSession]:
        with SessionLocal() as session:
            row = session.execute(
                text(
                    """
                    SELECT player_id, last_game_at, welcome_shown_on
                    FROM player_session
                    WHERE player_id = :player_id
                    """
                ),
                {"player_id": str(player_id)},
            ).first()
        if row is None:
            return None
        return _row_to_session(row)

    def save(self, player_session: PlayerSession) -> None:
        params = {
            "player_id": str(player_session.player_id),
            "last_game_at": player_session.last_game_at,
            "welcome_shown_on": player_session.welcome_shown_on,
        }
        with SessionLocal.begin() as session:
            result = session.execute(
                text(
                    """
                    UPDATE player_session
                    SET last_game_at = :last_game_at,
                        welcome_shown_on = :welcome_shown_on
                    WHERE player_id = :player_id
                    """
                ),
                params,
            )
            if result.rowcount == 0:
                session.execute(
                    text(
                        """
                        INSERT INTO player_session (player_id, last_game_at, welcome_shown_on)
                        VALUES (:player_id, :last_game_at, :welcome_shown_on)
                        """
                    ),
                    params,
                )
