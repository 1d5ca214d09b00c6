"""
security/ - Credential Checks
=============================
Capabilities that decide whether a supplied credential matches a stored one.
"""
