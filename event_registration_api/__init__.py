"""
Top‑level package for the Event Registration API.

All functionality lives in submodules under ``app``; this marker makes
fully qualified imports such as ``event_registration_api.app.main``
work from the project root and from the test suite.
"""

__all__ = []
