"""
Core utilities: shared exceptions used across capabilities, facade and API server.
"""
