# Services package init
"""
AskBoard Backend: Services Layer
=================================

What:  Business logic between routes (HTTP) and the Store (persistence).
How:   Services are stateless singletons; every call receives the Store
       handle to use, so tests can pass a temporary or mocked store.

Service Inventory:
    - store.py:           Store, one pooled session + deadline per query
    - fanout.py:          gather_all(), ordered all-or-nothing fan-in
    - answer_service.py:  AnswerSetResolver, answer and best-answer writes
    - aggregator.py:      Aggregator, questions → AggregatedResult list
    - search_queries.py:  Pure SELECT builders per SearchScope
    - search_service.py:  SearchService, scoped search + aggregation
    - karma_service.py:   KarmaService, vote ledger
    - question_service.py: feeds, question pages, asking, topics
    - user_service.py:    profile lookups and bio edits
"""
