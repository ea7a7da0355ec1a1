"""Package with one module that fails to import."""
