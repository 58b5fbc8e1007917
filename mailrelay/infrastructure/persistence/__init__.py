"""Persistence: database engine, ORM models, repositories, migrations."""
