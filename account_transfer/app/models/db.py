from __future__ import annotations

from sqlmodel import Field, SQLModel

class Account(SQLModel, table=True):
    __tablename__ = "member"

    member_id: str = Field(primary_key=True)
    money: int = Field(default=0)
