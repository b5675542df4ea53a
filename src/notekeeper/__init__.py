"""notekeeper: short notes with ownership and a 24-hour edit window."""
