from ._canonical_key import CanonicalKey
from ._exceptions import EmptyKeyError, InconsistentIndexError
from ._index import ElementIndex
from ._parser import (
    deparse_element,
    deparse_entry,
    deparse_key,
    deparse_value,
    load_entries,
    parse_entry,
    parse_key,
)
from ._set_map import SetMap
