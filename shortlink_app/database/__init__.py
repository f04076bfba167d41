from .connection import Base, SessionLocal, engine, build_engine, get_db

__all__ = ["Base", "SessionLocal", "engine", "build_engine", "get_db"]
