from rangetree.segment_tree import EagerTree, LazyTree, SegmentTree

__version__ = "0.1.0"

__all__ = [
    "EagerTree",
    "LazyTree",
    "SegmentTree",
    "__version__",
]
