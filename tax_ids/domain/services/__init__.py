"""
Domain Services
===============

- normalizer: canonical form of user input
- grammar_registry: enabled grammars indexed by tax country code
- verification_dispatcher: routes a tax id to its authority verifier
"""
