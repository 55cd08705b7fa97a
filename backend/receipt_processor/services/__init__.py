"""Service layer: scoring engine and receipt registry."""
