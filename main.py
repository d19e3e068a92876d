#!/usr/bin/env python3
"""
Main entry point for the basic Twitch bot
"""

import sys

from basicbot.main import run

if __name__ == "__main__":
    sys.exit(run())
