"""In-process storage for conversation state between HTTP turns."""
