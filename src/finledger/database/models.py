"""SQLAlchemy models for finledger database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    Boolean,
    Table,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


transaction_tags = Table(
    "transaction_tags",
    Base.metadata,
    Column("transaction_id", Integer, ForeignKey("transactions.id"), primary_key=True),
    Column("tag_id", Integer, ForeignKey("tags.id"), primary_key=True),
)


class AccountType(Base):
    """Account type reference data."""

    __tablename__ = "account_types"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    category = Column(String, nullable=False)
    normal_balance = Column(String, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    accounts = relationship("Account", back_populates="account_type")


class Account(Base):
    """Chart of accounts model with hierarchical structure."""

    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True)
    owner_id = Column(String, nullable=True)
    parent_id = Column(Integer, ForeignKey("accounts.id"), nullable=True)
    account_type_id = Column(Integer, ForeignKey("account_types.id"), nullable=True)
    name = Column(String, nullable=False)
    code = Column(String, nullable=True)
    description = Column(String, nullable=True)
    is_placeholder = Column(Boolean, default=False, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    balance = Column(Numeric(18, 2), default=0, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    parent = relationship("Account", remote_side=[id], backref="children")
    account_type = relationship("AccountType", back_populates="accounts")
    entries = relationship("TransactionEntry", back_populates="account")
    prices = relationship("AccountPrice", back_populates="account")


class Transaction(Base):
    """Transaction header model."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    owner_id = Column(String, nullable=True)
    reference_number = Column(String, nullable=True)
    description = Column(String, nullable=False)
    transaction_date = Column(Date, nullable=False)
    total_amount = Column(Numeric(18, 2), nullable=False)
    notes = Column(String, nullable=True)
    is_split = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    entries = relationship(
        "TransactionEntry",
        back_populates="transaction",
        cascade="all, delete-orphan",
        order_by="TransactionEntry.line_number",
    )
    tags = relationship("Tag", secondary=transaction_tags, back_populates="transactions")


class TransactionEntry(Base):
    """Ledger line model."""

    __tablename__ = "transaction_entries"

    id = Column(Integer, primary_key=True)
    transaction_id = Column(Integer, ForeignKey("transactions.id"), nullable=False)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    entry_side = Column(String, nullable=False)
    quantity = Column(Numeric(18, 6), default=1, nullable=False)
    price = Column(Numeric(18, 6), nullable=True)
    amount = Column(Numeric(18, 2), nullable=False)
    line_number = Column(Integer, default=1, nullable=False)
    description = Column(String, nullable=True)

    # Relationships
    transaction = relationship("Transaction", back_populates="entries")
    account = relationship("Account", back_populates="entries")


class AccountPrice(Base):
    """Price observation model, one per account and date."""

    __tablename__ = "account_prices"

    id = Column(Integer, primary_key=True)
    owner_id = Column(String, nullable=True)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    price = Column(Numeric(18, 6), nullable=False)
    date = Column(Date, nullable=False)
    notes = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (UniqueConstraint("account_id", "date", name="uq_account_price_date"),)

    # Relationships
    account = relationship("Account", back_populates="prices")


class Tag(Base):
    """Transaction tag model."""

    __tablename__ = "tags"

    id = Column(Integer, primary_key=True)
    owner_id = Column(String, nullable=True)
    name = Column(String, nullable=False)
    color = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (UniqueConstraint("owner_id", "name", name="uq_tag_owner_name"),)

    # Relationships
    transactions = relationship("Transaction", secondary=transaction_tags, back_populates="tags")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
