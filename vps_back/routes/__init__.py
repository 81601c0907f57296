# Routes package init
"""
vps-back — API Routes Package
==============================

Route Inventory:
    - health.py:    GET  /                              (greeting)
                    GET  /health                        (service health check)
    - brew.py:      GET  /brew/track/{project}/{file}   (count + redirect, public)
                    GET  /brew/stats                    (download stats, public)
    - sources.py:   GET  /secure/source                 (list counters, API key)
                    POST /secure/source                 (increment counter, API key)
    - stickers.py:  GET  /secure/stickers               (list, API key)
                    GET  /secure/stickers/{id}          (detail, API key)
                    POST /secure/stickers               (create, API key)

Design Principle:
    Routes are THIN: extract request data, call a service, wrap the result
    in the response envelope. Business logic belongs in services.
"""
