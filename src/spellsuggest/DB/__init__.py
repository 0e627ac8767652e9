from .api import SpellingBackend, make_backend
from .hashed import HashedBackend
from .dichotomy import BufferLineSource, DichotomyBackend, write_dichotomy_file
from .bucketed import BucketedBackend

__all__ = [
    "SpellingBackend",
    "make_backend",
    "HashedBackend",
    "DichotomyBackend",
    "BufferLineSource",
    "write_dichotomy_file",
    "BucketedBackend",
]
