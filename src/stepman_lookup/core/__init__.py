"""Configuration, schemas and I/O helpers shared by the lookup modules."""
