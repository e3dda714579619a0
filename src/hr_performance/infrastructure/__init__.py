"""Infrastructure: the in-process event log and its publisher facade."""
