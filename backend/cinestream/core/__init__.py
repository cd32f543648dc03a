"""
Core configuration, database, clock and locking
"""
