"""
Expense & ExpenseShare Models
"""
from sqlalchemy import Column, String, DateTime, Date, Numeric, ForeignKey, Uuid, func
import uuid

from tripindo.utils.database import Base


class Expense(Base):
    __tablename__ = "expenses"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    trip_id = Column(Uuid, ForeignKey("trips.id"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    category = Column(String(50), nullable=False)
    date = Column(Date, nullable=False)
    paid_by_user_id = Column(Uuid, ForeignKey("users.id"), nullable=False)
    paid_for_user_id = Column(Uuid, ForeignKey("users.id"), nullable=True)  # Null = shared by everyone

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<Expense {self.title} {self.amount}>"


class ExpenseShare(Base):
    __tablename__ = "expense_shares"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    expense_id = Column(Uuid, ForeignKey("expenses.id"), nullable=False, index=True)
    user_id = Column(Uuid, ForeignKey("users.id"), nullable=False)
    share_amount = Column(Numeric(12, 2), nullable=False)

    def __repr__(self):
        return f"<ExpenseShare {self.user_id} {self.share_amount}>"
