"""Mass action configuration persistence."""
