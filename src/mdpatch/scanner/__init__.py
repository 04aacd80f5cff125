"""Line scanner for mdpatch.

Walks a document top to bottom and emits a StructuralEvent for every
heading or block marker line, skipping fenced and indented code.

Architecture:
scanner/
├── __init__.py          # Re-exports Scanner, ScannerMode, scan
├── core.py              # Scanner class (mixin composition + line window)
├── modes.py             # ScannerMode enum, character sets
└── classifiers/         # Line classification mixins
    ├── heading.py       # ATX heading
    ├── block.py         # Block marker
    └── fence.py         # Fenced code open/close

"""

from mdpatch.scanner.core import Scanner, scan
from mdpatch.scanner.modes import ScannerMode

__all__ = ["Scanner", "ScannerMode", "scan"]
