# Schemas package init
"""
Pydantic request/response models, kept separate from the ORM models so the
API contract (what is exposed, how it is validated) can change
independently of the tables. `hashed_password` never appears here.
"""
