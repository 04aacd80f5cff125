"""Line classifiers for the mdpatch scanner.

Each classifier is a mixin that decides whether a single line matches a
particular marker pattern. Classifiers never move the scan position.
"""

from mdpatch.scanner.classifiers.block import BlockClassifierMixin
from mdpatch.scanner.classifiers.fence import FenceClassifierMixin
from mdpatch.scanner.classifiers.heading import HeadingClassifierMixin

__all__ = [
    "BlockClassifierMixin",
    "FenceClassifierMixin",
    "HeadingClassifierMixin",
]
