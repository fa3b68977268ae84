"""Offline tooling producing the component catalog."""
