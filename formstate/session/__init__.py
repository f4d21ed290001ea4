"""Event replay against bound form definitions."""

from formstate.session.replay import EventRecord, FormSession, ReplayError, ReplayResult

__all__ = ["EventRecord", "FormSession", "ReplayError", "ReplayResult"]
