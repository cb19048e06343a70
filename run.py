#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Jednoduchý launcher pro win-toast bez instalace.

Použití:
    python run.py push --title "Ahoj" --message "Světe"
    python run.py --help
"""

import sys
from pathlib import Path

# Přidáme src/ do Python path, aby mohly importy fungovat
project_root = Path(__file__).parent
src_path = project_root / "src"
sys.path.insert(0, str(src_path))

from win_toast.cli import main

if __name__ == "__main__":
    main()
