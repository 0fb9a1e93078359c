"""
Thought Trail blogging API.

A FastAPI service for publishing blogs with likes, threaded comments and
notifications, backed by SQLAlchemy and S3-compatible object storage.
"""
