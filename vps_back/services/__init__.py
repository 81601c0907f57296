# Services package init
"""
vps-back — Services Layer
==========================

What:  Business logic layer sitting between routes (HTTP) and database (persistence).
How:   Services take an AsyncSession plus plain values, apply the rules, and
       raise VpsBackError subclasses; routes only wrap results in envelopes.

Service Inventory:
    - BrewService:    Bottle filename parsing, download counting, stats
    - SourceService:  Referrer counters (atomic increment, paginated list)
    - StickerService: Sticker list / detail / create

Each module exposes a module-level singleton (brew_service, source_service,
sticker_service) that the routers import.
"""
