"""
Textual front end for Archive Overlap Analyzer.
"""
