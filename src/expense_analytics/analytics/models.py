from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Any, Iterable, Literal, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator

ResultStatus = Literal["ok", "invalid_parameter", "not_found"]


class TransactionRecord(BaseModel):
    """
    One expense as handed over by the persistence layer.

    Read-only for the engine: every aggregate is built from these,
    none of them is ever changed.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    category: str
    amount: float = Field(ge=0)
    description: str | None = None
    date: dt.date
    created_at: dt.datetime | None = Field(default=None, alias="createdAt")

    @field_validator("id", mode="before")
    @classmethod
    def _id_to_str(cls, v: Any) -> Any:
        if isinstance(v, int):
            return str(v)
        return v

    @field_validator("date", mode="before")
    @classmethod
    def _civil_date(cls, v: Any) -> Any:
        # "2025-01-05T23:30:00Z" must stay on the 5th whatever the host timezone is
        if isinstance(v, dt.datetime):
            return v.date()
        if isinstance(v, str):
            s = v.strip()
            if len(s) > 10 and s[10] in ("T", " "):
                return s[:10]
            return s
        return v

    @property
    def day(self) -> str:
        return self.date.isoformat()


def records_from_dicts(items: Iterable[Mapping[str, Any]]) -> list[TransactionRecord]:
    return [TransactionRecord.model_validate(dict(it)) for it in items]


def ensure_records(records: Iterable[TransactionRecord | Mapping[str, Any]]) -> list[TransactionRecord]:
    out: list[TransactionRecord] = []
    for r in records:
        if isinstance(r, TransactionRecord):
            out.append(r)
        else:
            out.append(TransactionRecord.model_validate(dict(r)))
    return out


@dataclass(frozen=True)
class CategoryShare:
    category: str
    amount: float
    transaction_count: int
    percentage: float


@dataclass(frozen=True)
class DailyTotal:
    date: str  # YYYY-MM-DD
    amount: float
    transaction_count: int


@dataclass(frozen=True)
class ExpenseItem:
    id: str
    category: str
    amount: float
    description: str | None
    date: str


def expense_item(r: TransactionRecord) -> ExpenseItem:
    return ExpenseItem(
        id=r.id,
        category=r.category,
        amount=r.amount,
        description=r.description,
        date=r.day,
    )


def same_category(label: str, wanted: str) -> bool:
    return (label or "").strip().casefold() == (wanted or "").strip().casefold()
