"""Settings, logging, database access, security and domain exceptions."""
