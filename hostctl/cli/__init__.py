"""
hostctl command-line interface.
"""
