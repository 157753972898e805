"""
SQLAlchemy ORM models (user-scoped dashboard tables)

Every entity table carries user_id: ownership is enforced by the
record store (UserScopedStore), rows never change owner.
"""
import uuid
from decimal import Decimal
from datetime import date as date_type, time as time_type, datetime, timezone
from sqlalchemy import (
    String, DateTime, Integer, Text, Date, Time, func, Boolean, Numeric, ForeignKey, Index, CheckConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.db.session import Base


def _new_id() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    """
    User model (session identity)
    """
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )


class _OwnedRecord:
    """Общие колонки: id, user_id, created_at, updated_at"""

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    user_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False
    )


class ProfileModel(_OwnedRecord, Base):
    """Profile: one-to-one with user"""
    __tablename__ = "profiles"

    full_name: Mapped[str | None] = mapped_column(String(255), nullable=True)

    __table_args__ = (
        Index("uq_profiles_user_id", "user_id", unique=True),
    )


class BusinessModel(_OwnedRecord, Base):
    __tablename__ = "businesses"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    industry: Mapped[str | None] = mapped_column(String(128), nullable=True)
    revenue: Mapped[Decimal] = mapped_column(
        Numeric(precision=20, scale=2), nullable=False, default=Decimal("0")
    )
    # active | inactive | pending
    status: Mapped[str] = mapped_column(String(16), nullable=False, default="active")


class DepartmentModel(_OwnedRecord, Base):
    __tablename__ = "departments"

    business_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("businesses.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)


class TransactionModel(_OwnedRecord, Base):
    """Ledger row: amount is always >= 0, direction is carried by type"""
    __tablename__ = "transactions"

    # income | expense
    type: Mapped[str] = mapped_column(String(16), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(precision=20, scale=2), nullable=False)
    category: Mapped[str] = mapped_column(String(64), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    date: Mapped[date_type] = mapped_column(Date, nullable=False)

    __table_args__ = (
        Index("ix_transactions_user_date", "user_id", "date"),
    )


class SavingsTargetModel(_OwnedRecord, Base):
    __tablename__ = "savings_targets"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    target_amount: Mapped[Decimal] = mapped_column(Numeric(precision=20, scale=2), nullable=False)
    current_amount: Mapped[Decimal] = mapped_column(
        Numeric(precision=20, scale=2), nullable=False, default=Decimal("0")
    )
    deadline: Mapped[date_type | None] = mapped_column(Date, nullable=True)
    # active | completed
    status: Mapped[str] = mapped_column(String(16), nullable=False, default="active")


class InvestmentModel(_OwnedRecord, Base):
    __tablename__ = "investments"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    type: Mapped[str] = mapped_column(String(64), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(precision=20, scale=2), nullable=False)
    current_value: Mapped[Decimal] = mapped_column(Numeric(precision=20, scale=2), nullable=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)


class GoalModel(_OwnedRecord, Base):
    __tablename__ = "goals"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    category: Mapped[str] = mapped_column(String(64), nullable=False)
    # low | medium | high
    priority: Mapped[str] = mapped_column(String(16), nullable=False, default="medium")
    # not_started | in_progress | completed | on_hold
    status: Mapped[str] = mapped_column(String(16), nullable=False, default="not_started")
    progress: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    target_date: Mapped[date_type | None] = mapped_column(Date, nullable=True)

    __table_args__ = (
        CheckConstraint("progress >= 0 AND progress <= 100", name="ck_goals_progress_range"),
    )


class PlannerEventModel(_OwnedRecord, Base):
    __tablename__ = "planner_events"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    # task | event | meeting | reminder
    type: Mapped[str] = mapped_column(String(16), nullable=False, default="task")
    priority: Mapped[str] = mapped_column(String(16), nullable=False, default="medium")
    date: Mapped[date_type] = mapped_column(Date, nullable=False)
    start_time: Mapped[time_type | None] = mapped_column(Time, nullable=True)
    end_time: Mapped[time_type | None] = mapped_column(Time, nullable=True)
    completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    __table_args__ = (
        Index("ix_planner_events_user_date", "user_id", "date"),
    )


# table name -> ORM model (record store registry)
TABLES = {
    "profiles": ProfileModel,
    "businesses": BusinessModel,
    "departments": DepartmentModel,
    "transactions": TransactionModel,
    "savings_targets": SavingsTargetModel,
    "investments": InvestmentModel,
    "goals": GoalModel,
    "planner_events": PlannerEventModel,
}
