from quillmarket.models.user import User
from quillmarket.models.job import Job
from quillmarket.models.bid import Bid
from quillmarket.models.order import Order
from quillmarket.models.transaction import Transaction
from quillmarket.models.writer_quiz import WriterQuiz

__all__ = ["User", "Job", "Bid", "Order", "Transaction", "WriterQuiz"]
