"""
Archive Overlap Analyzer - cross-archive duplication accounting.
"""
