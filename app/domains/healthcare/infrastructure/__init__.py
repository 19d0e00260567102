"""
Healthcare Infrastructure Layer

Persistence, notification channels and report storage.
"""
