"""Runtime implementations: event bus, configuration, logging and errors."""
