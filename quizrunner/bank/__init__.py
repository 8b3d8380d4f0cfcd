"""Question bank access, week selection and pool building."""

from .bank import BankError, QuestionBank, load_bank, split_week_key, week_key  # noqa: F401
from .pool import build_pool  # noqa: F401
from .selection import WeekSelection  # noqa: F401
