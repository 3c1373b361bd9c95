#!/usr/bin/env python3
"""
Launcher script for PyInstaller builds.

This script is the entry point for the standalone executable.
It imports and runs the main function from the code_launcher package.
"""

import sys

from code_launcher.__main__ import main

if __name__ == "__main__":
    sys.exit(main() or 0)
