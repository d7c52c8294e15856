"""Infrastructure layer: settings, logging and database access."""
