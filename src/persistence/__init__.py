"""Resource persistence layer.

This package maps create and update operations onto content and header
writes inside versioned storage objects.
"""
