# Routes package init
"""
AskBoard Backend: API Routes Package
=====================================

Route Inventory:
    - health.py:     GET  /health
    - questions.py:  /api/topics, /api/questions/...
    - search.py:     GET  /api/search
    - karma.py:      /api/answers/{qid}/{uid}/...
    - users.py:      /api/users/...

Routes stay thin: extract parameters, call a service with the Store,
return its records. Business rules live in services.
"""
