"""
Core cross-cutting concerns: exceptions, logging, locking, HTTP middleware.
"""
