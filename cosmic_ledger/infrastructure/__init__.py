"""Infrastructure adapters: database, documents, settings and logging."""
