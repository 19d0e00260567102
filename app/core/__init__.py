"""
Core architecture components: domain kernel, application wiring and infrastructure helpers.
"""
