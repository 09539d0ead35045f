#!/usr/bin/env python3
"""
Adaptive Scroller demo launcher.

Run this from the project root to open the demo window.
"""

import sys

if __name__ == '__main__':
    from adaptive_scroller.run_gui import main
    sys.exit(main())
