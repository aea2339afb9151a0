"""
Use cases built on the repositories.

Each service orchestrates the repository to implement the loan desk rules
(one outstanding loan per loanable, only active entities may borrow).
"""
