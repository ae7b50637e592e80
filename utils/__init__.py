"""
utils package
-------------

Contains utility modules used throughout the assignment service.

Includes configuration constants, logging setup, entity attribute helpers, entity file loading and workload statistics.
"""
