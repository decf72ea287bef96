"""Infrastructure layer — dataset loading and the shared graph index."""
