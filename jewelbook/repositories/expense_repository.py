# jewelbook/repositories/expense_repository.py

from jewelbook.models.expense_model import Expense
from jewelbook.repositories.base import DatedRepository


class ExpenseRepository(DatedRepository):
    model = Expense
    label = "Expense"
