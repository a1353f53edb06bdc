#!/usr/bin/env python
"""
Entry point script for RippleRadar
"""
import sys
from rippleradar.cli import main

if __name__ == "__main__":
    sys.exit(main())
