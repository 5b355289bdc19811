"""
Entry point for `python -m sigstamp`.

Usage:
    python -m sigstamp render document.pdf --scale 1.5
    python -m sigstamp place 100 100 --canvas-width 918 --canvas-height 1188
    python -m sigstamp sign document.pdf --image signature.png --canvas 100 100
"""

from .ui.cli import main

main()
