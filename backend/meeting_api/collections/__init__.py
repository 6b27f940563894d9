"""
Data-access functions, one module per entity.

Each function receives the request's SQLAlchemy session and performs a
single logical store operation.
"""
