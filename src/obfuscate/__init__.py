"""obfuscate package.

Composable building blocks for masking credentials, PII and tokens:

    import obfuscate

    # Keep the first and last 4 characters
    card = obfuscate.portion().keep_at_start(4).keep_at_end(4).build()
    card("1234567890123456")  # '1234********3456'

    # Different rules for different parts of the same string
    chain = obfuscate.none().until_length(4).then(obfuscate.all_characters())
    chain("123456")  # '1234**'

    email = obfuscate.at_first("@").split_to(obfuscate.all_characters(), obfuscate.none())
    email("test@example.org")  # '****@example.org'
"""

from .integrations import (
    ErrorStrategy,
    HttpHeaderObfuscator,
    HttpParameterObfuscator,
    MapObfuscator,
    ParameterDecodeError,
    http_headers,
    http_parameters,
    maps,
)
from .obfuscator import (
    FunctionObfuscator,
    InvalidConfiguration,
    Obfuscator,
    ObfuscatorPrefix,
    PrefixChain,
    from_function,
)
from .obfuscators import (
    AllMask,
    FixedValue,
    Unchanged,
    all_characters,
    none,
    with_fixed_length,
    with_fixed_value,
)
from .portion import Portion, PortionBuilder, portion
from .splitpoint import SplitObfuscator, SplitPoint, at_first, at_last, at_nth, split_point

__version__ = "0.1.0"

__all__ = [
    "AllMask",
    "ErrorStrategy",
    "FixedValue",
    "FunctionObfuscator",
    "HttpHeaderObfuscator",
    "HttpParameterObfuscator",
    "InvalidConfiguration",
    "MapObfuscator",
    "Obfuscator",
    "ObfuscatorPrefix",
    "ParameterDecodeError",
    "Portion",
    "PortionBuilder",
    "PrefixChain",
    "SplitObfuscator",
    "SplitPoint",
    "Unchanged",
    "all_characters",
    "at_first",
    "at_last",
    "at_nth",
    "from_function",
    "http_headers",
    "http_parameters",
    "maps",
    "none",
    "portion",
    "split_point",
    "with_fixed_length",
    "with_fixed_value",
]
