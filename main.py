#!/usr/bin/env python3
"""FitFlow entry point.

Run with:
    python main.py run prog_full_body_express
    python -m fitflow list
"""

import sys

from fitflow.__main__ import main


if __name__ == "__main__":
    sys.exit(main())
