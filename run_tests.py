#!/usr/bin/env python3
"""
Test runner for the link analytics project.

Usage:
    python run_tests.py                 # whole suite
    python run_tests.py -k concurrent   # extra arguments go to pytest
"""

import subprocess
import sys
from pathlib import Path

PROJECT_DIR = Path(__file__).resolve().parent


def run_tests(extra_args):
    """Run pytest on tests/ from the project directory, return its exit code"""
    print("🧪 Running Link Analytics Tests")
    print("=" * 40)

    command = [sys.executable, "-m", "pytest", "tests/", "-v", "--tb=short", *extra_args]
    try:
        result = subprocess.run(command, cwd=PROJECT_DIR)
    except FileNotFoundError:
        print("❌ Python interpreter not found")
        return 1

    if result.returncode == 0:
        print("\n✅ All tests passed!")
    elif result.returncode == 5:
        print("\n⚠️  No tests collected")
    else:
        print(f"\n❌ Tests failed with exit code {result.returncode}")
    return result.returncode


if __name__ == "__main__":
    sys.exit(run_tests(sys.argv[1:]))
