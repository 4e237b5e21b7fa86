"""
Infrastructure Layer
====================

Settings, HTTP transports and authority clients.
"""
