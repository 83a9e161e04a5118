"""Test package. Point settings at SQLite and cheap bcrypt before app modules import."""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
