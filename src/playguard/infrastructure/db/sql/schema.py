from __future__ import annotations

from sqlalchemy import text
from sqlalchemy.engine import Engine

PLAYER_SESSION_DDL = """
CREATE TABLE IF NOT EXISTS player_session (
    player_id VARCHAR(64) NOT NULL PRIMARY KEY,
    last_game_at BIGINT NULL,
    welcome_shown_on VARCHAR(16) NULL
)
"""


def ensure_schema(engine: Engine) -> None:
    with engine.begin() as conn:
        conn.execute(text(PLAYER_SESSION_DDL))
