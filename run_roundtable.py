#!/usr/bin/env python
"""
Run a voice roundtable from the terminal

Usage:
  python run_roundtable.py personas.yaml
  python run_roundtable.py personas.yaml --directive "Casual chat about travel"
  python run_roundtable.py personas.yaml --context notes.txt --text-only
"""
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent / "src"))

from voice_roundtable.cli import main

if __name__ == "__main__":
    main()
