"""
Authority Verifiers
===================

One verifier per tax id family. Each builds the lookup request and parses
the answer; the HTTP call itself belongs to the transport.
"""

from .base import Verifier
from .vies import Vies
from .hmrc import Hmrc
from .bfs import Bfs
from .brreg import Brreg, translate_keys

__all__ = [
    "Verifier",
    "Vies",
    "Hmrc",
    "Bfs",
    "Brreg",
    "translate_keys",
]
