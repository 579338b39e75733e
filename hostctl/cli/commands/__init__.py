"""
hostctl CLI commands.
"""
