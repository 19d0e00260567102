"""
Healthcare Application Layer

Use cases orchestrating the booking domain through ports.
"""
