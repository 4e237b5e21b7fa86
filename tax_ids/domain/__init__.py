"""
Domain Layer
============

Tax id value objects, their grammars and the services that build and
verify them. Authority clients live in the infrastructure layer.
"""
