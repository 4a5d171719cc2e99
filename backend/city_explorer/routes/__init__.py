# Routes package init
"""
City Explorer Backend — API Routes Package
============================================

Route Inventory:
    - location.py:  GET /location   (cache-aside geocoding)
    - explorer.py:  GET /weather, /parks, /movies, /yelp
    - health.py:    GET /health, GET /

Routes stay thin: read query parameters, call a service, return its
records. Validation and error classification live in the services.
"""
