"""
Pydantic schemas returned and accepted by the listing services.
"""
