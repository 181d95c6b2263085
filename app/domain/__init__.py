"""
Domain types for the sales dataset and analysis results.
"""
