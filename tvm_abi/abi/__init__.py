"""
tvm_abi.abi
===========

Public ABI surface:
  • Type descriptors and the type-string parser.
  • Tokens and the lenient/strict tokenizer (text → token).
  • Head/tail encoder and decoder (token ⇄ bytes).
  • Token formatter (token → display text).
  • ABI entries, method signatures and 4-byte selectors.

Everything here is pure-Python and deterministic.
"""

from __future__ import annotations

from .decoding import *  # noqa: F401,F403
from .decoding import __all__ as _all_decoding
from .encoding import *  # noqa: F401,F403
from .encoding import __all__ as _all_encoding
from .entry import *  # noqa: F401,F403
from .entry import __all__ as _all_entry
from .formatting import *  # noqa: F401,F403
from .formatting import __all__ as _all_formatting
from .signature import *  # noqa: F401,F403
from .signature import __all__ as _all_signature
from .tokenizer import *  # noqa: F401,F403
from .tokenizer import __all__ as _all_tokenizer
from .tokens import *  # noqa: F401,F403
from .tokens import __all__ as _all_tokens
from .types import *  # noqa: F401,F403
from .types import __all__ as _all_types

__all__ = tuple(
    dict.fromkeys(  # preserve order, dedupe
        (
            *_all_types,
            *_all_tokens,
            *_all_tokenizer,
            *_all_encoding,
            *_all_decoding,
            *_all_formatting,
            *_all_entry,
            *_all_signature,
        )
    )
)
