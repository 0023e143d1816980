"""Creator studio: owner views over the caller's own videos."""
