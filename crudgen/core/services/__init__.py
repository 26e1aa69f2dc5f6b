"""
Core services — parsing, fragment emission, merging and generation.
"""
