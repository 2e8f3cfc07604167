"""Cross-cutting platform helpers: logging, filesystem, processes, retries."""
