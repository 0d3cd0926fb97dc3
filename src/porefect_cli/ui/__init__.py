"""Terminal presentation of scheduled tasks."""
