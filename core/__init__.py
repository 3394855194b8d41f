"""Cross-cutting helpers: configuration, errors, logging and timing."""
