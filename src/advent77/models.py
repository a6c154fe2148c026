"""Database models for advent77."""

import datetime as dt

from sqlmodel import Field, SQLModel


class PlayRecord(SQLModel, table=True):
    id: int | None = Field(default=None, primary_key=True)
    started_at: dt.datetime = Field(
        default_factory=lambda: dt.datetime.now(dt.UTC)
    )
    finished_at: dt.datetime = Field(
        default_factory=lambda: dt.datetime.now(dt.UTC)
    )
    seed: int | None = None
    commands: int = 0
    deaths: int = 0
    restarts: int = 0
    final_room: int = 0
    outcome: str = Field(index=True)
