#!/usr/bin/env python3
"""
run.py - Main entry point for dropfour

Examples:

    # Two players at one terminal
    python run.py play

    # Pick the colors and a bigger board
    python run.py --rows 7 --cols 9 play --p1-color blue --p2-color green

    # Inspect a position (row-major, 0 empty, 1/2 players)
    python run.py test --position 0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,0,2,2,2,0,0,0,0,1,1,1,1,0,0,0

    # Benchmark with debug timers in a log file
    python run.py --debug_level trace --log_file bench.log benchmark --iterations 5000
"""

import sys

from dropfour.interfaces.cli import main

if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
