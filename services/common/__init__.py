"""
Common utilities and configurations for the folder services.
"""
