"""Domain value objects shared by the persistence layer and its callers."""

from .entities import Loan, Loanable, Loanee

__all__ = ["Loan", "Loanable", "Loanee"]
