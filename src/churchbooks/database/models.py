"""SQLAlchemy models for churchbooks database."""

from datetime import datetime, UTC
from sqlalchemy import (
    JSON,
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class Church(Base):
    """Church model."""

    __tablename__ = "churches"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    pastorate_name = Column(String, nullable=False, index=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (UniqueConstraint("pastorate_name", "name", name="uq_pastorate_church"),)

    # Relationships
    offertories = relationship("ChurchOffertory", back_populates="church")


class FinancialYear(Base):
    """Financial year registered for a pastorate."""

    __tablename__ = "financial_years"

    id = Column(Integer, primary_key=True)
    pastorate_name = Column(String, nullable=False)
    label = Column(String, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (UniqueConstraint("pastorate_name", "label", name="uq_pastorate_year"),)


class OffertoryCategory(Base):
    """Offertory category model."""

    __tablename__ = "offertory_categories"

    id = Column(Integer, primary_key=True)
    pastorate_name = Column(String, nullable=False)
    name = Column(String, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (
        UniqueConstraint("pastorate_name", "name", name="uq_pastorate_category"),
    )


class ChurchOffertory(Base):
    """Monthly offertory of a church."""

    __tablename__ = "church_offertories"

    id = Column(Integer, primary_key=True)
    pastorate_name = Column(String, nullable=False)
    year = Column(String, nullable=False)
    month = Column(String, nullable=False)
    church_id = Column(Integer, ForeignKey("churches.id"), nullable=False)
    total_amount = Column(Numeric(12, 2), nullable=False)

    # One offertory per church per month
    __table_args__ = (
        UniqueConstraint(
            "pastorate_name", "year", "month", "church_id", name="uq_church_offertory_month"
        ),
    )

    # Relationships
    church = relationship("Church", back_populates="offertories")
    services = relationship(
        "OffertoryService",
        back_populates="offertory",
        cascade="all, delete-orphan",
        order_by="OffertoryService.date",
    )


class OffertoryService(Base):
    """Collection of one service within a church offertory."""

    __tablename__ = "offertory_services"

    id = Column(Integer, primary_key=True)
    offertory_id = Column(Integer, ForeignKey("church_offertories.id"), nullable=False)
    date = Column(Date, nullable=False)
    # {category_id: "amount"}; amounts kept as strings to preserve precision
    category_amounts = Column(JSON, nullable=False, default=dict)
    total = Column(Numeric(12, 2), nullable=False)

    # Relationships
    offertory = relationship("ChurchOffertory", back_populates="services")


class Receipt(Base):
    """Receipt book model."""

    __tablename__ = "receipts"

    id = Column(Integer, primary_key=True)
    pastorate_name = Column(String, nullable=False)
    year = Column(String, nullable=False)
    month = Column(String, nullable=False)
    receipt_no = Column(Integer, nullable=False)
    date = Column(Date, nullable=False)
    name = Column(String, nullable=False)
    area = Column(String, nullable=True)
    category = Column(String, nullable=True)
    amount = Column(Numeric(12, 2), nullable=False)


class SangamPayment(Base):
    """Sangam payment model."""

    __tablename__ = "sangam_payments"

    id = Column(Integer, primary_key=True)
    pastorate_name = Column(String, nullable=False)
    year = Column(String, nullable=False)
    month = Column(String, nullable=False)
    receipt_no = Column(Integer, nullable=False)
    member_name = Column(String, nullable=False)
    family_name = Column(String, nullable=True)
    church_id = Column(Integer, ForeignKey("churches.id"), nullable=True)
    service_date = Column(Date, nullable=True)
    date = Column(Date, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)


class HarvestFestivalBaseEntry(Base):
    """Harvest festival auction pledge."""

    __tablename__ = "harvest_festival_base_entries"

    id = Column(Integer, primary_key=True)
    pastorate_name = Column(String, nullable=False)
    year = Column(String, nullable=False)
    name = Column(String, nullable=False)
    auction_amount = Column(Numeric(12, 2), nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    payments = relationship(
        "HarvestFestivalPayment", back_populates="base_entry", cascade="all, delete-orphan"
    )


class HarvestFestivalPayment(Base):
    """Payment against a harvest festival pledge."""

    __tablename__ = "harvest_festival_payments"

    id = Column(Integer, primary_key=True)
    pastorate_name = Column(String, nullable=False)
    year = Column(String, nullable=False)
    month = Column(String, nullable=False)
    base_entry_id = Column(
        Integer, ForeignKey("harvest_festival_base_entries.id"), nullable=False
    )
    name = Column(String, nullable=False)
    date = Column(Date, nullable=False)
    service_date = Column(Date, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)

    # Relationships
    base_entry = relationship("HarvestFestivalBaseEntry", back_populates="payments")


class Expense(Base):
    """PC cash book expense model."""

    __tablename__ = "expenses"

    id = Column(Integer, primary_key=True)
    pastorate_name = Column(String, nullable=False)
    year = Column(String, nullable=False)
    month = Column(String, nullable=False)
    vno = Column(String, nullable=False)
    date = Column(Date, nullable=False)
    expense_details = Column(String, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)


class OpeningBalance(Base):
    """April opening balance of a financial year."""

    __tablename__ = "opening_balances"

    id = Column(Integer, primary_key=True)
    pastorate_name = Column(String, nullable=False)
    year = Column(String, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    updated_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (UniqueConstraint("pastorate_name", "year", name="uq_opening_balance"),)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    connect_args = {}
    if database_url.startswith("sqlite"):
        # Ledger reads run on worker threads, each with its own session
        connect_args["check_same_thread"] = False
    engine = create_engine(database_url, echo=False, connect_args=connect_args)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine, expire_on_commit=False)
