"""Lightweight logging utilities for review sessions and debugging."""

import datetime
import sys


def log_event(message, stream=None):
    # Default to stderr so board output on stdout stays clean.
    timestamp = datetime.datetime.now().strftime("%H:%M:%S")
    print(f"[{timestamp}] {message}", file=stream or sys.stderr)
