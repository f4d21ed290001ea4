"""Authoritative form state: values, touched, validity and errors."""

from formstate.state.store import FormStateView, StateStore

__all__ = ["FormStateView", "StateStore"]
