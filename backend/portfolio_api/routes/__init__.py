# Routes package init
"""
Portfolio API - Routes Package
===============================

Route Inventory:
    - resources.py:  /resources[/{id}]   (multipart or JSON, optional file)
    - projects.py:   /projects[/{id}]
    - messages.py:   /messages[/{id}]    (contact form)
    - profile.py:    /profile            (singleton: GET, POST, PUT)
    - health.py:     /, /health
    - collection.py: router factory shared by projects and messages

Routes stay thin: parse the request, call one service method, shape the
response. Errors propagate to the global handlers in main.py.
"""
