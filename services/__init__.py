"""Service layer package for Pocket Notes.

Holds UI-independent helpers the store and the Qt widgets share, such as the
group selection state.
"""
