"""
Rivulet Operators
=================

Plain functions taking the source observable as their first argument. The
fluent methods on `Observable` (see `rivulet.observable.operations`) are thin
wrappers around these.
"""

from .combining import (
    amb,
    combine_latest,
    concat,
    merge,
    sample,
    start_with,
    with_latest_from,
    zip_,
)
from .filtering import (
    TakeBehavior,
    distinct_until_changed,
    element_at,
    filter_,
    ignore_elements,
    skip,
    skip_until,
    skip_while,
    take,
    take_until,
    take_until_trigger,
    take_while,
)
from .flattening import (
    concat_all,
    concat_map,
    flat_map,
    flat_map_latest,
    merge_all,
    switch_latest,
)
from .transformation import compact_map, enumerated, map_, reduce, scan, to_list
from .utility import debug, dematerialize, do, materialize

__all__ = [
    "TakeBehavior",
    "amb",
    "combine_latest",
    "compact_map",
    "concat",
    "concat_all",
    "concat_map",
    "debug",
    "dematerialize",
    "distinct_until_changed",
    "do",
    "element_at",
    "enumerated",
    "filter_",
    "flat_map",
    "flat_map_latest",
    "ignore_elements",
    "map_",
    "materialize",
    "merge",
    "merge_all",
    "reduce",
    "sample",
    "scan",
    "skip",
    "skip_until",
    "skip_while",
    "start_with",
    "switch_latest",
    "take",
    "take_until",
    "take_until_trigger",
    "take_while",
    "to_list",
    "with_latest_from",
    "zip_",
]
