"""
Service layer.

Services own transactions (through UnitOfWork), enforce business rules and
return Pydantic schemas; they never hand ORM rows to callers.
"""
