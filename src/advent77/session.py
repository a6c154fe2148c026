"""Run journal: one PlayRecord per finished run."""

import datetime as dt

from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine, select

from .engine.state import GameState
from .logging import get_logger
from .models import PlayRecord

logger = get_logger(__name__)


class PlayJournal:
    """Stores a summary of each run in the configured database."""

    def __init__(self, engine: Engine):
        self.engine = engine
        SQLModel.metadata.create_all(engine)

    @classmethod
    def from_url(cls, database_url: str) -> "PlayJournal":
        return cls(create_engine(database_url))

    def record(
        self,
        state: GameState,
        outcome: str,
        started_at: dt.datetime,
        seed: int | None = None,
    ) -> PlayRecord:
        """Save the summary of a finished run."""
        record = PlayRecord(
            started_at=started_at,
            finished_at=dt.datetime.now(dt.UTC),
            seed=seed,
            commands=state.commands,
            deaths=state.deaths,
            restarts=state.restarts,
            final_room=state.current_room,
            outcome=outcome,
        )
        with Session(self.engine) as session:
            session.add(record)
            session.commit()
            session.refresh(record)
        logger.debug("run_recorded", record_id=record.id, outcome=outcome)
        return record

    def recent(self, limit: int = 10) -> list[PlayRecord]:
        """The latest runs, newest first."""
        statement = (
            select(PlayRecord)
            .order_by(PlayRecord.started_at.desc(), PlayRecord.id.desc())
            .limit(limit)
        )
        with Session(self.engine) as session:
            return list(session.exec(statement).all())
