# Models package init
"""
AskBoard Backend: ORM Models
=============================

Importing this package registers every table with Base.metadata
(used by Alembic --autogenerate and by the test suite's create_all).
"""

from askboard.models.user import User
from askboard.models.question import Question, Topic
from askboard.models.answer import Answer, BestAnswer
from askboard.models.karma import KarmaVote

__all__ = ["User", "Question", "Topic", "Answer", "BestAnswer", "KarmaVote"]
