"""
Pydantic schema definitions for API payloads.

Schemas are kept apart from the SQL in the service layer so the wire
format (camelCase JSON) is decoupled from the table layout.
"""
