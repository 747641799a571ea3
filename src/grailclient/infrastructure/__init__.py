"""Infrastructure layer: HTTP integration, session and observability."""
