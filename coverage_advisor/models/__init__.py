"""ORM Models — SQLAlchemy persistence mappings.

Invariants:
    - Every model inherits from db.base.Base
    - Models hold no domain logic; core/ types are converted at the sink boundary
"""
