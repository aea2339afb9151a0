"""SQLAlchemy tables for loanees, loanables and loans."""
from __future__ import annotations

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    ForeignKey,
    Integer,
    String,
)

from .session import Base


class LoaneeRow(Base):
    __tablename__ = "Loanees"
    __table_args__ = {"sqlite_autoincrement": True}

    loanee_id = Column(Integer, primary_key=True, autoincrement=True, nullable=False)
    loanee_first_name = Column(String(50), nullable=False)
    loanee_last_name = Column(String(50), nullable=False)
    loanee_email = Column(String(75), nullable=True)
    loanee_barcode = Column(String(50), nullable=False)
    loanee_active = Column(Boolean, nullable=False, default=True)


class LoanableRow(Base):
    __tablename__ = "Loanables"
    __table_args__ = {"sqlite_autoincrement": True}

    loanable_id = Column(Integer, primary_key=True, autoincrement=True, nullable=False)
    loanable_name = Column(String(50), nullable=False)
    loanable_barcode = Column(String(50), nullable=False)
    loanable_active = Column(Boolean, nullable=False, default=True)


class LoanRow(Base):
    __tablename__ = "Loans"
    __table_args__ = {"sqlite_autoincrement": True}

    loan_id = Column(Integer, primary_key=True, autoincrement=True, nullable=False)
    # Weak references: hydrated by id at read time, never cascaded.
    loanable_id = Column(Integer, ForeignKey("Loanables.loanable_id"), nullable=True)
    loanee_id = Column(Integer, ForeignKey("Loanees.loanee_id"), nullable=True)
    check_out = Column(Date, nullable=False)
    check_in = Column(Date, nullable=True)


TABLES = (LoaneeRow.__table__, LoanableRow.__table__, LoanRow.__table__)
