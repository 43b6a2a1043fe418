"""
Service layer.

Each service encapsulates the business logic and queries of one area:
registrations, events and the admin dashboard.  Services raise the
exceptions from ``core.exceptions``; they never build HTTP responses.
"""
