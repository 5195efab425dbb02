"""Service-account credentials for the calendar gateway."""
