"""Core infrastructure: exceptions, validation, scheduling and error handling."""
